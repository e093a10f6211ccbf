"""Chat DTOs for API request/response."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field

from productboards.domain.entities.message import Message


class MessageDTO(BaseModel):
    """DTO for message data returned to frontend."""

    id: str
    conversation_id: str
    role: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=message.id.value,
            conversation_id=message.conversation_id.value,
            role=message.role,
            content=message.content,
            metadata=message.metadata,
            created_at=message.created_at,
        )
