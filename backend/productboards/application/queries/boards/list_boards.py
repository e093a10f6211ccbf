"""List Boards Query."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.domain.entities.board import Board
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListBoardsQuery(Query[list[Board]]):
    user_id: UserId


class ListBoardsHandler(QueryHandler[list[Board]]):
    def __init__(self, board_repository: BoardRepository):
        self._board_repository = board_repository

    async def execute(self, query: ListBoardsQuery) -> list[Board]:
        boards = await self._board_repository.get_by_owner(query.user_id)
        return sorted(boards, key=lambda b: b.created_at, reverse=True)
