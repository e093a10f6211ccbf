"""Board DTOs for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from productboards.application.dto.product import ProductDTO
from productboards.domain.entities.board import Board


class BoardDTO(BaseModel):
    id: str
    name: str
    note: Optional[str] = None
    share_token: Optional[str] = None
    is_public: bool
    allow_comments: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, board: Board) -> "BoardDTO":
        return cls(
            id=board.id.value,
            name=board.name,
            note=board.note,
            share_token=board.share_token.value if board.share_token else None,
            is_public=board.is_public,
            allow_comments=board.allow_comments,
            created_at=board.created_at,
            updated_at=board.updated_at,
        )


class SharedBoardDTO(BaseModel):
    """Public view of a board: the board plus its products."""

    board: BoardDTO
    products: list[ProductDTO]
