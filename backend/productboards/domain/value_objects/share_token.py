"""
ShareToken Value Object - short random token under which a board is published.
"""

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ShareToken:
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Share token cannot be empty")

    @classmethod
    def generate(cls, length: int = 8) -> "ShareToken":
        """Random token taken from the hex digits of a fresh UUID4."""
        return cls(uuid4().hex[:length])

    def __str__(self) -> str:
        return self.value
