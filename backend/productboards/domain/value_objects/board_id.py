"""
BoardId Value Object - UUID wrapper for board identity.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class BoardId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("BoardId cannot be empty")
        UUID(self.value)

    @classmethod
    def generate(cls) -> "BoardId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
