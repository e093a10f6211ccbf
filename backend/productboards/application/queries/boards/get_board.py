"""Get Board Query."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.board import Board
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetBoardQuery(Query[Board]):
    board_id: BoardId
    user_id: UserId


class GetBoardHandler(QueryHandler[Board]):
    def __init__(self, guard: OwnershipGuard):
        self._guard = guard

    async def execute(self, query: GetBoardQuery) -> Board:
        return await self._guard.board(query.board_id, query.user_id)
