"""
Board Insight Queries - one or two sentences about a set of products.

`BoardInsightQuery` works on products passed by the caller;
`StoredBoardInsightQuery` loads the products of one of the caller's boards.
"""

from dataclasses import dataclass, field

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.ai_calls import call_ai
from productboards.application.services.authorization import OwnershipGuard
from productboards.config.settings import Config
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.ports.ai_assistant import AiAssistant, ProductSummary
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class BoardInsightQuery(Query[str]):
    products: list[ProductSummary] = field(default_factory=list)
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class BoardInsightHandler(QueryHandler[str]):
    def __init__(self, assistant: AiAssistant):
        self._assistant = assistant

    async def execute(self, query: BoardInsightQuery) -> str:
        if not query.products:
            raise DomainValidationError("At least one product is required")
        insight = await call_ai(
            self._assistant.board_insight(query.products),
            query.ai_timeout,
            operation="board insight",
        )
        return insight.strip()


@dataclass(frozen=True)
class StoredBoardInsightQuery(Query[str]):
    board_id: BoardId
    user_id: UserId
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class StoredBoardInsightHandler(QueryHandler[str]):
    def __init__(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        insight_handler: BoardInsightHandler,
    ):
        self._guard = guard
        self._product_repository = product_repository
        self._insight_handler = insight_handler

    async def execute(self, query: StoredBoardInsightQuery) -> str:
        await self._guard.board(query.board_id, query.user_id)
        products = await self._product_repository.get_by_board(query.board_id)
        summaries = [
            ProductSummary(name=p.name, price=p.current_price, note=p.note)
            for p in products
        ]
        return await self._insight_handler.execute(
            BoardInsightQuery(products=summaries, ai_timeout=query.ai_timeout)
        )
