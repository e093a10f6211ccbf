"""
Record Price Command.

Appends a price history entry for a link, then moves the link's and the
product's current price to it. Subscribers of the link's price channel
receive the entry through the repository's feed publisher.

Alerts (target reached, drop beyond the owner's threshold) are logged and
counted; delivering them by email is outside this service.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.entities.product import PriceHistoryEntry, Product
from productboards.domain.ports.repositories import (
    AlertPreferencesRepository,
    ProductRepository,
)
from productboards.domain.services.price_alerts import detect_price_alerts
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId
from productboards.observability.metrics import (
    MetricsErrorType,
    increment_error,
    increment_price_alert,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordPriceCommand(Command[PriceHistoryEntry]):
    link_id: ProductLinkId
    user_id: UserId
    price: float
    currency: Optional[str] = None


class RecordPriceHandler(CommandHandler[PriceHistoryEntry]):
    def __init__(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        preferences_repository: AlertPreferencesRepository,
    ):
        self._guard = guard
        self._product_repository = product_repository
        self._preferences_repository = preferences_repository

    async def execute(self, command: RecordPriceCommand) -> PriceHistoryEntry:
        product, link = await self._guard.product_link(command.link_id, command.user_id)
        entry = PriceHistoryEntry.create(
            link.id, command.price, command.currency or link.currency
        )
        previous_price = link.current_price
        await self._product_repository.add_price(entry)

        link.current_price = entry.price
        link.currency = entry.currency
        link.last_checked_at = entry.recorded_at
        await self._product_repository.save_link(link)

        product.current_price = entry.price
        product.updated_at = datetime.now(timezone.utc)
        await self._product_repository.save(product)

        await self._check_alerts(product, previous_price, entry)
        return entry

    async def _check_alerts(
        self, product: Product, previous_price: Optional[float], entry: PriceHistoryEntry
    ) -> None:
        """Best-effort: the price is already recorded."""
        try:
            preferences = await self._preferences_repository.get_by_user(product.owner)
        except Exception as e:
            increment_error(MetricsErrorType.BEST_EFFORT_STEP_FAILED)
            logger.warning(f"Alert preferences of {product.owner.value} unavailable: {e}")
            return
        preferences = preferences or AlertPreferences.default(product.owner)

        for alert in detect_price_alerts(product, previous_price, entry.price, preferences):
            increment_price_alert(alert.value)
            logger.info(
                f"[Price alert] {alert.value} for product {product.id.value}: "
                f"{previous_price} -> {entry.price} {entry.currency} "
                f"(target {product.target_price}, "
                f"threshold {preferences.price_drop_threshold}%)"
            )
