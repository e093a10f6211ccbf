"""Prisma Board Repository Implementation."""

from typing import Optional

from prisma import Prisma
from prisma.models import Board as PrismaBoard

from productboards.domain.entities.board import Board
from productboards.domain.ports.repositories import BoardRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.share_token import ShareToken
from productboards.domain.value_objects.user_id import UserId
from productboards.infrastructure.persistence.errors import store_errors


class PrismaBoardRepository(BoardRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaBoard) -> Board:
        return Board(
            id=BoardId(record.id),
            owner=UserId(record.user_id),
            name=record.name,
            note=record.note,
            share_token=ShareToken(record.share_token) if record.share_token else None,
            is_public=record.is_public,
            allow_comments=record.allow_comments,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, board_id: BoardId) -> Optional[Board]:
        with store_errors("get board"):
            record = await self._prisma.board.find_unique(where={"id": board_id.value})
        return self._to_entity(record) if record else None

    async def get_by_share_token(self, token: ShareToken) -> Optional[Board]:
        with store_errors("get board by share token"):
            record = await self._prisma.board.find_unique(
                where={"share_token": token.value}
            )
        return self._to_entity(record) if record else None

    async def get_by_owner(self, owner: UserId) -> list[Board]:
        with store_errors("list boards"):
            records = await self._prisma.board.find_many(
                where={"user_id": owner.value},
                order={"created_at": "desc"},
            )
        return [self._to_entity(record) for record in records]

    async def save(self, board: Board) -> None:
        fields = {
            "name": board.name,
            "note": board.note,
            "share_token": board.share_token.value if board.share_token else None,
            "is_public": board.is_public,
            "allow_comments": board.allow_comments,
            "updated_at": board.updated_at,
        }
        with store_errors("save board"):
            await self._prisma.board.upsert(
                where={"id": board.id.value},
                data={
                    "create": {
                        "id": board.id.value,
                        "user_id": board.owner.value,
                        "created_at": board.created_at,
                        **fields,
                    },
                    "update": fields,
                },
            )

    async def delete(self, board_id: BoardId) -> bool:
        """Delete a board; products, links and prices cascade."""
        with store_errors("delete board"):
            count = await self._prisma.board.delete_many(where={"id": board_id.value})
        return count > 0
