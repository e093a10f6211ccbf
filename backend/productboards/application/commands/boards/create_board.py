"""Create Board Command."""

from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.entities.board import Board
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class CreateBoardCommand(Command[Board]):
    user_id: UserId
    name: str
    note: Optional[str] = None


class CreateBoardHandler(CommandHandler[Board]):
    def __init__(self, board_repository: BoardRepository):
        self._board_repository = board_repository

    async def execute(self, command: CreateBoardCommand) -> Board:
        board = Board.create(owner=command.user_id, name=command.name, note=command.note)
        await self._board_repository.save(board)
        return board
