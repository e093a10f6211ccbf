"""Get Price History Query - entries of one link, oldest first."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import PriceHistoryEntry
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetPriceHistoryQuery(Query[list[PriceHistoryEntry]]):
    link_id: ProductLinkId
    user_id: UserId


class GetPriceHistoryHandler(QueryHandler[list[PriceHistoryEntry]]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, query: GetPriceHistoryQuery) -> list[PriceHistoryEntry]:
        await self._guard.product_link(query.link_id, query.user_id)
        entries = await self._product_repository.get_price_history(query.link_id)
        return sorted(entries, key=lambda e: e.recorded_at)
