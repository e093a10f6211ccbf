"""
ProductId Value Object - UUID wrapper for product identity.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ProductId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("ProductId cannot be empty")
        UUID(self.value)

    @classmethod
    def generate(cls) -> "ProductId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
