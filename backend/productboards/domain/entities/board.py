"""
Board Entity - A named, optionally public collection of tracked products.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from productboards.domain.exceptions.validation_error import DomainValidationError
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.share_token import ShareToken
from productboards.domain.value_objects.user_id import UserId


@dataclass
class Board:
    id: BoardId
    owner: UserId
    name: str
    created_at: datetime
    updated_at: datetime
    note: Optional[str] = None
    share_token: Optional[ShareToken] = None
    is_public: bool = False
    allow_comments: bool = False

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise DomainValidationError("Board name cannot be empty")

    @classmethod
    def create(cls, owner: UserId, name: str, note: Optional[str] = None) -> Board:
        now = datetime.now(timezone.utc)
        return cls(
            id=BoardId.generate(),
            owner=owner,
            name=(name or "").strip(),
            note=(note or "").strip() or None,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner.value == user_id.value

    def update(self, name: str, note: Optional[str] = None) -> None:
        if not name or not name.strip():
            raise DomainValidationError("Board name cannot be empty")
        self.name = name.strip()
        self.note = (note or "").strip() or None
        self.updated_at = datetime.now(timezone.utc)

    def set_sharing(self, is_public: bool, token_length: int = 8) -> None:
        """Publishing issues a fresh token; unpublishing clears it."""
        self.is_public = is_public
        self.share_token = ShareToken.generate(token_length) if is_public else None
        self.updated_at = datetime.now(timezone.utc)
