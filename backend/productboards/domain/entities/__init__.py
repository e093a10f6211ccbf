"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from productboards.domain.entities.conversation import Conversation
from productboards.domain.entities.message import Message
from productboards.domain.entities.board import Board
from productboards.domain.entities.product import Product, ProductLink, PriceHistoryEntry
from productboards.domain.entities.alert_preferences import AlertPreferences

__all__ = [
    "Conversation",
    "Message",
    "Board",
    "Product",
    "ProductLink",
    "PriceHistoryEntry",
    "AlertPreferences",
]
