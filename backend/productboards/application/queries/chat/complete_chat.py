"""
CompleteChat Query - stateless chat completion.

The caller supplies the whole transcript; nothing is persisted. An optional
image reference is folded into the latest user turn.
"""

from dataclasses import dataclass, field
from typing import Optional

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.ai_calls import call_ai
from productboards.config.settings import Config
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.ports.ai_assistant import AiAssistant, ChatReply
from productboards.domain.services.transcript import fold_image_ref

ALLOWED_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class CompleteChatQuery(Query[ChatReply]):
    messages: list[dict[str, str]] = field(default_factory=list)
    image_ref: Optional[str] = None
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class CompleteChatHandler(QueryHandler[ChatReply]):
    def __init__(self, assistant: AiAssistant):
        self._assistant = assistant

    async def execute(self, query: CompleteChatQuery) -> ChatReply:
        if not query.messages:
            raise DomainValidationError("messages cannot be empty")
        transcript = []
        for turn in query.messages:
            if turn.get("role") not in ALLOWED_ROLES:
                raise DomainValidationError(f"Unsupported role: {turn.get('role')}")
            transcript.append({"role": turn["role"], "content": turn.get("content") or ""})

        transcript = fold_image_ref(transcript, query.image_ref)
        return await call_ai(
            self._assistant.reply(transcript), query.ai_timeout, operation="chat"
        )
