"""
Price Watch - live price history of one product link.

Subscribes to the link's "price_history:{product_link_id}" channel after the
ownership gate; payloads are decoded into PriceHistoryEntry before delivery.
"""

import inspect
import logging
from typing import Awaitable, Callable, Union

from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import PriceHistoryEntry
from productboards.domain.ports.event_feed import (
    EventFeed,
    EventPayload,
    Subscription,
    price_channel,
)
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

PriceHandler = Callable[[PriceHistoryEntry], Union[Awaitable[None], None]]


class PriceWatch:
    def __init__(self, guard: OwnershipGuard, feed: EventFeed):
        self._guard = guard
        self._feed = feed

    async def ensure_visible(self, link_id: ProductLinkId, user_id: UserId) -> None:
        await self._guard.product_link(link_id, user_id)

    async def subscribe(
        self, link_id: ProductLinkId, user_id: UserId, on_entry: PriceHandler
    ) -> Subscription:
        await self.ensure_visible(link_id, user_id)

        async def _deliver(payload: EventPayload) -> None:
            try:
                entry = PriceHistoryEntry.from_payload(payload)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Dropping undecodable price event on {link_id.value}: {e}")
                return
            result = on_entry(entry)
            if inspect.isawaitable(result):
                await result

        return await self._feed.subscribe(price_channel(link_id.value), _deliver)
