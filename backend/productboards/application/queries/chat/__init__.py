"""Chat-related queries."""

from productboards.application.queries.chat.get_chat_history import (
    GetChatHistoryQuery,
    GetChatHistoryHandler,
    GetChatHistoryResult,
)
from productboards.application.queries.chat.complete_chat import (
    CompleteChatQuery,
    CompleteChatHandler,
)

__all__ = [
    "GetChatHistoryQuery",
    "GetChatHistoryHandler",
    "GetChatHistoryResult",
    "CompleteChatQuery",
    "CompleteChatHandler",
]
