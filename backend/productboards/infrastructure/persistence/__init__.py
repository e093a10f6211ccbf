"""
Persistence Layer - Database implementations.

Contains Prisma repository implementations for domain ports.
"""

from productboards.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from productboards.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from productboards.infrastructure.persistence.prisma_board_repository import (
    PrismaBoardRepository,
)
from productboards.infrastructure.persistence.prisma_product_repository import (
    PrismaProductRepository,
)
from productboards.infrastructure.persistence.prisma_alert_preferences_repository import (
    PrismaAlertPreferencesRepository,
)

__all__ = [
    "PrismaConversationRepository",
    "PrismaMessageRepository",
    "PrismaBoardRepository",
    "PrismaProductRepository",
    "PrismaAlertPreferencesRepository",
]
