"""
Toggle Board Sharing Command.

Making a board public issues a fresh random share token; making it private
clears the token, so an old link stops resolving even if the board is
published again later.
"""

import logging
from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.config.settings import Config
from productboards.domain.entities.board import Board
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleBoardSharingCommand(Command[Board]):
    board_id: BoardId
    user_id: UserId
    is_public: bool


class ToggleBoardSharingHandler(CommandHandler[Board]):
    def __init__(self, guard: OwnershipGuard, board_repository: BoardRepository):
        self._guard = guard
        self._board_repository = board_repository

    async def execute(self, command: ToggleBoardSharingCommand) -> Board:
        board = await self._guard.board(command.board_id, command.user_id)
        board.set_sharing(command.is_public, token_length=Config.SHARE_TOKEN_LENGTH)
        await self._board_repository.save(board)
        logger.info(
            f"Board {board.id.value} is now {'public' if board.is_public else 'private'}"
        )
        return board
