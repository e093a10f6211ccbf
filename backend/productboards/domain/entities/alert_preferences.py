"""
AlertPreferences Entity - per-user price alert settings.

A user without a stored row gets the defaults; the first update creates it.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from productboards.domain.exceptions.validation_error import DomainValidationError
from productboards.domain.value_objects.user_id import UserId

DEFAULT_DROP_THRESHOLD = 15
MIN_DROP_THRESHOLD = 1
MAX_DROP_THRESHOLD = 50


@dataclass
class AlertPreferences:
    user_id: UserId
    email_enabled: bool = True
    price_drop_threshold: int = DEFAULT_DROP_THRESHOLD  # percent
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def default(cls, user_id: UserId) -> AlertPreferences:
        return cls(user_id=user_id)

    @property
    def is_stored(self) -> bool:
        return self.created_at is not None

    def apply_changes(self, changes: dict[str, Any]) -> None:
        unknown = set(changes) - {"email_enabled", "price_drop_threshold"}
        if unknown:
            raise DomainValidationError(
                f"Cannot update alert preferences: {', '.join(sorted(unknown))}"
            )
        if "email_enabled" in changes and changes["email_enabled"] is None:
            raise DomainValidationError("email_enabled must be true or false")
        if "price_drop_threshold" in changes:
            threshold = changes["price_drop_threshold"]
            if threshold is None or not (
                MIN_DROP_THRESHOLD <= threshold <= MAX_DROP_THRESHOLD
            ):
                raise DomainValidationError(
                    f"price_drop_threshold must be between {MIN_DROP_THRESHOLD} "
                    f"and {MAX_DROP_THRESHOLD}"
                )
        for key, value in changes.items():
            setattr(self, key, value)
        now = datetime.now(timezone.utc)
        self.created_at = self.created_at or now
        self.updated_at = now
