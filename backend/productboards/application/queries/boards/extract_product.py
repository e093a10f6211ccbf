"""Extract Product Query - product fields read from a retailer URL by the AI."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.ai_calls import call_ai
from productboards.config.settings import Config
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.ports.ai_assistant import AiAssistant, ExtractedProduct


@dataclass(frozen=True)
class ExtractProductQuery(Query[ExtractedProduct]):
    url: str
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class ExtractProductHandler(QueryHandler[ExtractedProduct]):
    def __init__(self, assistant: AiAssistant):
        self._assistant = assistant

    async def execute(self, query: ExtractProductQuery) -> ExtractedProduct:
        url = (query.url or "").strip()
        if not url:
            raise DomainValidationError("url is required")
        return await call_ai(
            self._assistant.extract_product(url),
            query.ai_timeout,
            operation="extract product",
        )
