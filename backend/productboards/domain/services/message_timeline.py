"""
MessageTimeline - the locally materialized message list of one conversation.

Three sources feed it: the initial load, insert-feed deliveries and the
sender's own confirmed writes. All of them go through `merge()`, which keeps
the list sorted by (created_at, id) and drops any message whose id is already
present. Feed delivery is at-least-once, so duplicates are expected input.
"""

from bisect import insort
from typing import Iterable

from productboards.domain.entities.message import Message
from productboards.domain.value_objects.conversation_id import ConversationId


class MessageTimeline:
    def __init__(self, conversation_id: ConversationId):
        self.conversation_id = conversation_id
        self._ids: set[str] = set()
        self._messages: list[Message] = []

    def merge(self, message: Message) -> bool:
        """Insert a message in order. Returns False if it was dropped."""
        if message.conversation_id != self.conversation_id:
            return False
        if message.id.value in self._ids:
            return False
        self._ids.add(message.id.value)
        insort(self._messages, message, key=lambda m: m.sort_key)
        return True

    def merge_all(self, messages: Iterable[Message]) -> int:
        return sum(1 for message in messages if self.merge(message))

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
