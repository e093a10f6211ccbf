"""
Message Repository Port - Interface for message persistence.
Implementation: productboards/infrastructure/persistence/prisma_message_repository.py

Messages are append-only: there is no update operation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from productboards.domain.entities.message import Message
from productboards.domain.value_objects.conversation_id import ConversationId


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        """Messages ascending by created_at. No limit means the full history."""
        ...

    @abstractmethod
    async def add(self, message: Message) -> None: ...
