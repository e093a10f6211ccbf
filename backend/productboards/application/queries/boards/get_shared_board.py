"""
Get Shared Board Query - public, unauthenticated view of a board.

A board resolves through its share token only while it is public; private
boards and unknown tokens are both reported as missing.
"""

import logging
from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.domain.entities.board import Board
from productboards.domain.entities.product import Product
from productboards.domain.exceptions import EntityNotFoundError
from productboards.domain.ports.repositories import BoardRepository, ProductRepository
from productboards.domain.value_objects.share_token import ShareToken

logger = logging.getLogger(__name__)


@dataclass
class SharedBoardResult:
    board: Board
    products: list[Product]


@dataclass(frozen=True)
class GetSharedBoardQuery(Query[SharedBoardResult]):
    share_token: ShareToken


class GetSharedBoardHandler(QueryHandler[SharedBoardResult]):
    def __init__(
        self, board_repository: BoardRepository, product_repository: ProductRepository
    ):
        self._board_repository = board_repository
        self._product_repository = product_repository

    async def execute(self, query: GetSharedBoardQuery) -> SharedBoardResult:
        board = await self._board_repository.get_by_share_token(query.share_token)
        if not board or not board.is_public:
            logger.debug(f"Shared board lookup missed for token {query.share_token}")
            raise EntityNotFoundError("Shared board not found")
        products = await self._product_repository.get_by_board(board.id)
        return SharedBoardResult(board=board, products=products)
