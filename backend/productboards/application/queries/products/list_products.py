"""List Products Query."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import Product
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListProductsQuery(Query[list[Product]]):
    board_id: BoardId
    user_id: UserId


class ListProductsHandler(QueryHandler[list[Product]]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, query: ListProductsQuery) -> list[Product]:
        await self._guard.board(query.board_id, query.user_id)
        products = await self._product_repository.get_by_board(query.board_id)
        return sorted(products, key=lambda p: p.created_at, reverse=True)
