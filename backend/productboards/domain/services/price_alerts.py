"""
Price alert rules applied when a new price is recorded for a link.

- TARGET_REACHED: the product has alerts enabled and the price is at or below
  its target price.
- PRICE_DROP: the owner's email alerts are on and the price fell by at least
  their threshold percentage from the link's previous price.
"""

from enum import Enum
from typing import Optional

from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.entities.product import Product


class PriceAlert(str, Enum):
    TARGET_REACHED = "target_reached"
    PRICE_DROP = "price_drop"


def drop_percent(previous: Optional[float], current: float) -> float:
    if not previous or previous <= 0 or current >= previous:
        return 0.0
    return (previous - current) / previous * 100


def detect_price_alerts(
    product: Product,
    previous_price: Optional[float],
    price: float,
    preferences: AlertPreferences,
) -> list[PriceAlert]:
    alerts = []
    if (
        product.price_alert_enabled
        and product.target_price is not None
        and price <= product.target_price
    ):
        alerts.append(PriceAlert.TARGET_REACHED)
    if (
        preferences.email_enabled
        and drop_percent(previous_price, price) >= preferences.price_drop_threshold
    ):
        alerts.append(PriceAlert.PRICE_DROP)
    return alerts
