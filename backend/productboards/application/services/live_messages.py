"""
LiveMessageList - a conversation view kept in sync with the insert feed.

Opening order is subscribe-then-load, so nothing inserted between the two
steps is missed; anything seen twice is dropped by the timeline's id check.

Usage:
    async with LiveMessageList(store, conversation_id, user_id) as live:
        render(live.messages)
        ...
    # subscription released here, also when the body raised
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from productboards.application.services.message_store import MessageStore
from productboards.domain.entities.message import Message
from productboards.domain.ports.event_feed import Subscription
from productboards.domain.services.message_timeline import MessageTimeline
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[Message], Union[Awaitable[None], None]]


class LiveMessageList:
    def __init__(
        self,
        store: MessageStore,
        conversation_id: ConversationId,
        user_id: UserId,
        on_change: Optional[ChangeHandler] = None,
    ):
        self._store = store
        self._user_id = user_id
        self._on_change = on_change
        self._subscription: Optional[Subscription] = None
        self.timeline = MessageTimeline(conversation_id)

    @property
    def conversation_id(self) -> ConversationId:
        return self.timeline.conversation_id

    @property
    def messages(self) -> list[Message]:
        return self.timeline.messages

    async def open(self) -> list[Message]:
        await self._store.ensure_visible(self.conversation_id, self._user_id)
        self._subscription = await self._store.subscribe(
            self.conversation_id, self._on_insert
        )
        try:
            loaded = await self._store.load(self.conversation_id, self._user_id)
        except Exception:
            await self.close()
            raise
        self.timeline.merge_all(loaded)
        return self.timeline.messages

    def record(self, message: Message) -> bool:
        """Merge a message this client wrote itself."""
        return self.timeline.merge(message)

    async def _on_insert(self, message: Message) -> None:
        if not self.timeline.merge(message):
            logger.debug(f"Duplicate delivery of message {message.id.value} dropped")
            return
        if self._on_change:
            result = self._on_change(message)
            if inspect.isawaitable(result):
                await result

    async def close(self) -> None:
        if self._subscription is not None:
            await self._subscription.release()

    async def __aenter__(self) -> "LiveMessageList":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
