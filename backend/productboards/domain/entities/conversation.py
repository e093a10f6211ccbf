"""
Conversation Entity - A titled chat thread between one user and the assistant.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from productboards.domain.exceptions.validation_error import DomainValidationError
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.user_id import UserId

DEFAULT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 100


@dataclass
class Conversation:
    id: ConversationId
    owner: UserId
    title: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, owner: UserId, title: Optional[str] = None) -> Conversation:
        now = datetime.now(timezone.utc)
        return cls(
            id=ConversationId.generate(),
            owner=owner,
            title=(title or "").strip() or DEFAULT_TITLE,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner.value == user_id.value

    def rename(self, new_title: str, max_length: int = TITLE_MAX_LENGTH) -> None:
        title = (new_title or "").strip()
        if not title:
            raise DomainValidationError("Title cannot be empty")
        if len(title) > max_length:
            raise DomainValidationError(f"Title cannot exceed {max_length} characters")

        self.title = title
        self.updated_at = datetime.now(timezone.utc)

    def touch(self, at: Optional[datetime] = None) -> None:
        self.updated_at = at or datetime.now(timezone.utc)
