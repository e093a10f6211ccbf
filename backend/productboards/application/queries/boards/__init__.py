"""Board-related queries."""

from .list_boards import ListBoardsQuery, ListBoardsHandler
from .get_board import GetBoardQuery, GetBoardHandler
from .get_shared_board import (
    GetSharedBoardQuery,
    GetSharedBoardHandler,
    SharedBoardResult,
)
from .board_insight import (
    BoardInsightQuery,
    BoardInsightHandler,
    StoredBoardInsightQuery,
    StoredBoardInsightHandler,
)
from .extract_product import ExtractProductQuery, ExtractProductHandler

__all__ = [
    "ListBoardsQuery",
    "ListBoardsHandler",
    "GetBoardQuery",
    "GetBoardHandler",
    "GetSharedBoardQuery",
    "GetSharedBoardHandler",
    "SharedBoardResult",
    "BoardInsightQuery",
    "BoardInsightHandler",
    "StoredBoardInsightQuery",
    "StoredBoardInsightHandler",
    "ExtractProductQuery",
    "ExtractProductHandler",
]
