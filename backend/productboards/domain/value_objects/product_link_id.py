"""
ProductLinkId Value Object - UUID wrapper for product link identity.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ProductLinkId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("ProductLinkId cannot be empty")
        UUID(self.value)

    @classmethod
    def generate(cls) -> "ProductLinkId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
