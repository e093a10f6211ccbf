"""
Prisma Conversation Repository Implementation.

Mapping:
- Prisma model fields: id, user_id, title, created_at, updated_at
- Domain entity: Conversation with value objects (ConversationId, UserId)
"""

from datetime import datetime
from typing import Optional

from prisma import Prisma
from prisma.models import Conversation as PrismaConversation

from productboards.domain.entities.conversation import Conversation
from productboards.domain.ports.repositories import ConversationRepository
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId
from productboards.infrastructure.persistence.errors import store_errors


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        return Conversation(
            id=ConversationId(record.id),
            owner=UserId(record.user_id),
            title=record.title,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        with store_errors("get conversation"):
            record = await self._prisma.conversation.find_unique(
                where={"id": conversation_id.value}
            )
        return self._to_entity(record) if record else None

    async def get_by_owner(self, owner: UserId, limit: int) -> list[Conversation]:
        """Conversations of a user, ordered by updated_at desc."""
        with store_errors("list conversations"):
            records = await self._prisma.conversation.find_many(
                where={"user_id": owner.value},
                order={"updated_at": "desc"},
                take=limit,
            )
        return [self._to_entity(record) for record in records]

    async def save(self, conversation: Conversation) -> None:
        """Save (create or update) conversation."""
        with store_errors("save conversation"):
            await self._prisma.conversation.upsert(
                where={"id": conversation.id.value},
                data={
                    "create": {
                        "id": conversation.id.value,
                        "user_id": conversation.owner.value,
                        "title": conversation.title,
                        "created_at": conversation.created_at,
                        "updated_at": conversation.updated_at,
                    },
                    "update": {
                        "title": conversation.title,
                        "updated_at": conversation.updated_at,
                    },
                },
            )

    async def touch(self, conversation_id: ConversationId, at: datetime) -> None:
        with store_errors("touch conversation"):
            await self._prisma.conversation.update_many(
                where={"id": conversation_id.value},
                data={"updated_at": at},
            )

    async def set_title(self, conversation_id: ConversationId, title: str) -> None:
        with store_errors("set conversation title"):
            await self._prisma.conversation.update_many(
                where={"id": conversation_id.value},
                data={"title": title},
            )

    async def delete(self, conversation_id: ConversationId) -> bool:
        """Delete conversation and its messages. False if nothing was deleted."""
        with store_errors("delete conversation"):
            count = await self._prisma.conversation.delete_many(
                where={"id": conversation_id.value}
            )
        return count > 0
