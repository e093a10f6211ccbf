"""
AI Assistant Port - the external completion endpoint.

Every method raises AiUnavailableError when the collaborator is rate limited,
out of quota, times out or answers with something unusable.
Implementation: productboards/infrastructure/ai/openai_assistant.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ChatReply:
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ExtractedProduct:
    name: str
    price: Optional[float] = None
    currency: Optional[str] = None
    image_url: Optional[str] = None
    retailer: Optional[str] = None


@dataclass
class ProductSummary:
    """Product descriptor sent to the insight prompt."""

    name: str
    price: Optional[float] = None
    note: Optional[str] = None


class AiAssistant(ABC):
    @abstractmethod
    async def reply(self, transcript: list[dict[str, str]]) -> ChatReply:
        """Answer the last turn of a role-tagged transcript."""
        ...

    @abstractmethod
    async def extract_product(self, url: str) -> ExtractedProduct: ...

    @abstractmethod
    async def product_note(self, name: str, price: Optional[float] = None) -> str: ...

    @abstractmethod
    async def board_insight(self, products: list[ProductSummary]) -> str: ...
