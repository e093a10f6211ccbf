"""
Board Repository Port - Interface for board persistence.
Implementation: productboards/infrastructure/persistence/prisma_board_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from productboards.domain.entities.board import Board
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.share_token import ShareToken
from productboards.domain.value_objects.user_id import UserId


class BoardRepository(ABC):
    @abstractmethod
    async def get_by_id(self, board_id: BoardId) -> Optional[Board]: ...

    @abstractmethod
    async def get_by_share_token(self, token: ShareToken) -> Optional[Board]: ...

    @abstractmethod
    async def get_by_owner(self, owner: UserId) -> list[Board]:
        """Boards of one user, newest first."""
        ...

    @abstractmethod
    async def save(self, board: Board) -> None: ...

    @abstractmethod
    async def delete(self, board_id: BoardId) -> bool: ...
