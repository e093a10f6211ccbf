"""
Conversation Repository Port - Interface for conversation persistence.
Implementation: productboards/infrastructure/persistence/prisma_conversation_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from productboards.domain.entities.conversation import Conversation
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_by_owner(self, owner: UserId, limit: int) -> list[Conversation]:
        """Conversations of one user, most recently updated first."""
        ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> None: ...

    @abstractmethod
    async def touch(self, conversation_id: ConversationId, at: datetime) -> None:
        """Set updated_at without rewriting other columns."""
        ...

    @abstractmethod
    async def set_title(self, conversation_id: ConversationId, title: str) -> None: ...

    @abstractmethod
    async def delete(self, conversation_id: ConversationId) -> bool:
        """Delete a conversation and its messages. False if nothing was deleted."""
        ...
