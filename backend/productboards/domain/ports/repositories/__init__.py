"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the application needs
- Raises StoreError when the underlying store fails

Infrastructure layer provides implementations.
"""

from productboards.domain.ports.repositories.conversation_repository import ConversationRepository
from productboards.domain.ports.repositories.message_repository import MessageRepository
from productboards.domain.ports.repositories.board_repository import BoardRepository
from productboards.domain.ports.repositories.product_repository import ProductRepository
from productboards.domain.ports.repositories.alert_preferences_repository import (
    AlertPreferencesRepository,
)

__all__ = [
    "ConversationRepository",
    "MessageRepository",
    "BoardRepository",
    "ProductRepository",
    "AlertPreferencesRepository",
]
