"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- chat.py         → MessageDTO
- conversation.py → ConversationDTO, ConversationGroupDTO
- board.py        → BoardDTO, SharedBoardDTO
- product.py      → ProductDTO, ProductLinkDTO, PriceHistoryDTO
- alert_preferences.py → AlertPreferencesDTO

Note: These are different from domain entities.
DTOs are for API input/output, entities are for business logic.
"""

from productboards.application.dto.chat import MessageDTO
from productboards.application.dto.conversation import (
    ConversationDTO,
    ConversationGroupDTO,
)
from productboards.application.dto.board import BoardDTO, SharedBoardDTO
from productboards.application.dto.product import (
    ProductDTO,
    ProductLinkDTO,
    PriceHistoryDTO,
)
from productboards.application.dto.alert_preferences import AlertPreferencesDTO

__all__ = [
    "MessageDTO",
    "ConversationDTO",
    "ConversationGroupDTO",
    "BoardDTO",
    "SharedBoardDTO",
    "ProductDTO",
    "ProductLinkDTO",
    "PriceHistoryDTO",
    "AlertPreferencesDTO",
]
