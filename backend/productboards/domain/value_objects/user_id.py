"""
UserId Value Object - identity-provider subject (UUID) of the caller.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserId:
    value: str  # `sub` claim of the access token

    def __post_init__(self):
        if not self.value:
            raise ValueError("UserId cannot be empty")

        UUID(self.value)  # Validate UUID format

    def __str__(self) -> str:
        return self.value
