"""Update Board Command - name and note."""

from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.board import Board
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class UpdateBoardCommand(Command[Board]):
    board_id: BoardId
    user_id: UserId
    name: str
    note: Optional[str] = None


class UpdateBoardHandler(CommandHandler[Board]):
    def __init__(self, guard: OwnershipGuard, board_repository: BoardRepository):
        self._guard = guard
        self._board_repository = board_repository

    async def execute(self, command: UpdateBoardCommand) -> Board:
        board = await self._guard.board(command.board_id, command.user_id)
        board.update(command.name, command.note)
        await self._board_repository.save(board)
        return board
