"""Conversation-related queries."""

from productboards.application.queries.conversations.list_conversations import (
    ListConversationsQuery,
    ListConversationsHandler,
    ListConversationsResult,
)

__all__ = [
    "ListConversationsQuery",
    "ListConversationsHandler",
    "ListConversationsResult",
]
