"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma):
    model Message {
        id              String   @id @default(uuid())
        conversation_id String
        role            String
        content         String
        metadata        Json     @default("{}")
        created_at      DateTime @default(now())
    }

Messages are append-only: there is no update or delete path.
"""

import logging
from typing import Optional

from prisma import Json, Prisma
from prisma.models import Message as PrismaMessage

from productboards.domain.entities.message import Message
from productboards.domain.ports.repositories.message_repository import MessageRepository
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.message_id import MessageId
from productboards.infrastructure.persistence.errors import store_errors

logger = logging.getLogger(__name__)


class PrismaMessageRepository(MessageRepository):
    """Handles persistence of Message entities to PostgreSQL via Prisma."""

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        metadata = record.metadata if isinstance(record.metadata, dict) else {}
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            role=record.role,
            content=record.content,
            created_at=record.created_at,
            metadata=metadata,
        )

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        """
        Messages of a conversation in chronological order (oldest first).

        With a limit, the most recent `limit` messages are returned, still
        oldest first.
        """
        with store_errors("load messages"):
            if limit is None:
                records = await self._prisma.message.find_many(
                    where={"conversation_id": conversation_id.value},
                    order=[{"created_at": "asc"}, {"id": "asc"}],
                )
            else:
                records = await self._prisma.message.find_many(
                    where={"conversation_id": conversation_id.value},
                    order=[{"created_at": "desc"}, {"id": "desc"}],
                    take=limit,
                )
                records.reverse()
        return [self._to_entity(record) for record in records]

    async def add(self, message: Message) -> None:
        with store_errors("insert message"):
            await self._prisma.message.create(
                data={
                    "id": message.id.value,
                    "conversation_id": message.conversation_id.value,
                    "role": message.role,
                    "content": message.content,
                    "metadata": Json(message.metadata),
                    "created_at": message.created_at,
                }
            )
