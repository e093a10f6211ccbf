"""Conversation DTOs for API request/response."""

from pydantic import BaseModel
from datetime import datetime

from productboards.domain.entities.conversation import Conversation


class ConversationDTO(BaseModel):
    id: str
    title: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, conversation: Conversation) -> "ConversationDTO":
        return cls(
            id=conversation.id.value,
            title=conversation.title,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
        )


class ConversationGroupDTO(BaseModel):
    """One recency bucket of the sidebar (Today, Yesterday, ...)."""

    label: str
    conversations: list[ConversationDTO]
