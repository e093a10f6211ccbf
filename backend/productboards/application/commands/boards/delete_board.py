"""Delete Board Command (idempotent, products cascade)."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.exceptions import AccessDeniedError
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class DeleteBoardCommand(Command[bool]):
    board_id: BoardId
    user_id: UserId


class DeleteBoardHandler(CommandHandler[bool]):
    def __init__(self, board_repository: BoardRepository):
        self._board_repository = board_repository

    async def execute(self, command: DeleteBoardCommand) -> bool:
        board = await self._board_repository.get_by_id(command.board_id)
        if not board:
            return False
        if not board.is_owned_by(command.user_id):
            raise AccessDeniedError("User does not own this board.")
        return await self._board_repository.delete(command.board_id)
