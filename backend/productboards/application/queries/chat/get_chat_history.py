"""
GetChatHistory Query - conversation with its ordered messages.

Used by the chat window to load a conversation when it is opened.
"""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.application.services.message_store import MessageStore
from productboards.domain.entities.conversation import Conversation
from productboards.domain.entities.message import Message
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId


@dataclass
class GetChatHistoryResult:
    """Result containing conversation metadata and messages."""

    conversation: Conversation
    messages: list[Message]


@dataclass(frozen=True)
class GetChatHistoryQuery(Query[GetChatHistoryResult]):
    conversation_id: ConversationId
    user_id: UserId


class GetChatHistoryHandler(QueryHandler[GetChatHistoryResult]):
    def __init__(self, guard: OwnershipGuard, message_store: MessageStore):
        self._guard = guard
        self._message_store = message_store

    async def execute(self, query: GetChatHistoryQuery) -> GetChatHistoryResult:
        """
        Raises:
            EntityNotFoundError: conversation missing or not the caller's
        """
        conversation = await self._guard.conversation(
            query.conversation_id, query.user_id
        )
        messages = await self._message_store.history(query.conversation_id)
        return GetChatHistoryResult(conversation=conversation, messages=messages)
