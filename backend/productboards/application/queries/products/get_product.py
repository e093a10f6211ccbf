"""Get Product Query."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import Product
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetProductQuery(Query[Product]):
    product_id: ProductId
    user_id: UserId


class GetProductHandler(QueryHandler[Product]):
    def __init__(self, guard: OwnershipGuard):
        self._guard = guard

    async def execute(self, query: GetProductQuery) -> Product:
        return await self._guard.product(query.product_id, query.user_id)
