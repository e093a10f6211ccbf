"""
Message Store Adapter - ordered history, appends and insert subscriptions.

    MessageStore
        ├── load()       → guard + MessageRepository.get_by_conversation (ascending)
        ├── append()     → MessageRepository.add (the notifying repository publishes)
        └── subscribe()  → EventFeed channel "messages:{conversation_id}"

Feed payloads are decoded back into Message entities before they reach the
caller; an undecodable payload is logged and dropped.
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.message import Message
from productboards.domain.ports.event_feed import (
    EventFeed,
    EventPayload,
    Subscription,
    message_channel,
)
from productboards.domain.ports.repositories import MessageRepository
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

MessageHandler = Callable[[Message], Union[Awaitable[None], None]]


class MessageStore:
    def __init__(
        self,
        guard: OwnershipGuard,
        msg_repo: MessageRepository,
        feed: EventFeed,
    ):
        self._guard = guard
        self._msg_repo = msg_repo
        self._feed = feed

    async def ensure_visible(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None:
        await self._guard.conversation(conversation_id, user_id)

    async def load(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> list[Message]:
        """
        Full ordered history of a conversation the caller can see.

        Raises:
            EntityNotFoundError: conversation missing or owned by someone else
        """
        await self._guard.conversation(conversation_id, user_id)
        return await self.history(conversation_id)

    async def history(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        """Unguarded read for callers that already passed the guard."""
        messages = await self._msg_repo.get_by_conversation(conversation_id, limit)
        return sorted(messages, key=lambda m: m.sort_key)

    async def append(self, message: Message) -> Message:
        await self._msg_repo.add(message)
        logger.debug(
            f"Appended {message.role} message {message.id.value} "
            f"to conversation {message.conversation_id.value}"
        )
        return message

    async def subscribe(
        self, conversation_id: ConversationId, on_insert: MessageHandler
    ) -> Subscription:
        async def _deliver(payload: EventPayload) -> None:
            try:
                message = Message.from_payload(payload)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    f"Dropping undecodable message event on {conversation_id.value}: {e}"
                )
                return
            result = on_insert(message)
            if inspect.isawaitable(result):
                await result

        return await self._feed.subscribe(message_channel(conversation_id.value), _deliver)
