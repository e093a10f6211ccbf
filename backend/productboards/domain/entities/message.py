"""
Message Entity - A single immutable turn in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from productboards.domain.value_objects.message_id import MessageId
from productboards.domain.value_objects.conversation_id import ConversationId

ROLES = ("user", "assistant")


def _now_ms() -> datetime:
    # Postgres timestamps written through Prisma keep milliseconds
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass(frozen=True)
class Message:
    id: MessageId
    conversation_id: ConversationId
    role: str
    content: str
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Invalid role: {self.role}")

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        role: str,
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        return cls(
            id=MessageId.generate(),
            conversation_id=conversation_id,
            role=role,
            content=content,
            created_at=_now_ms(),
            metadata=dict(metadata or {}),
        )

    @property
    def sort_key(self) -> tuple[datetime, str]:
        return (self.created_at, self.id.value)

    def to_payload(self) -> dict[str, Any]:
        """Row snapshot published on the insert feed."""
        return {
            "id": self.id.value,
            "conversation_id": self.conversation_id.value,
            "role": self.role,
            "content": self.content,
            "metadata": self.metadata,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Message:
        return cls(
            id=MessageId(payload["id"]),
            conversation_id=ConversationId(payload["conversation_id"]),
            role=payload["role"],
            content=payload["content"],
            created_at=datetime.fromisoformat(payload["created_at"]),
            metadata=payload.get("metadata") or {},
        )
