"""
Product Entities - Tracked products, their retailer links and price history.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from productboards.domain.exceptions.validation_error import DomainValidationError
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId

DEFAULT_CURRENCY = "INR"

# Fields a caller may change through a partial update
EDITABLE_FIELDS = (
    "name",
    "image_url",
    "note",
    "current_price",
    "currency",
    "price_alert_enabled",
    "target_price",
)


@dataclass
class ProductLink:
    id: ProductLinkId
    product_id: ProductId
    url: str
    created_at: datetime
    retailer: Optional[str] = None
    current_price: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    last_checked_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        product_id: ProductId,
        url: str,
        retailer: Optional[str] = None,
        current_price: Optional[float] = None,
        currency: Optional[str] = None,
    ) -> ProductLink:
        if not url or not url.strip():
            raise DomainValidationError("Link URL cannot be empty")
        now = datetime.now(timezone.utc)
        return cls(
            id=ProductLinkId.generate(),
            product_id=product_id,
            url=url.strip(),
            retailer=retailer,
            current_price=current_price,
            currency=currency or DEFAULT_CURRENCY,
            last_checked_at=now if current_price is not None else None,
            created_at=now,
        )


@dataclass(frozen=True)
class PriceHistoryEntry:
    id: str
    product_link_id: ProductLinkId
    price: float
    currency: str
    recorded_at: datetime

    @classmethod
    def create(
        cls, product_link_id: ProductLinkId, price: float, currency: Optional[str] = None
    ) -> PriceHistoryEntry:
        if price is None or price < 0:
            raise DomainValidationError("Price must be a non-negative number")
        return cls(
            id=str(uuid4()),
            product_link_id=product_link_id,
            price=float(price),
            currency=currency or DEFAULT_CURRENCY,
            recorded_at=datetime.now(timezone.utc),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "product_link_id": self.product_link_id.value,
            "price": self.price,
            "currency": self.currency,
            "recorded_at": self.recorded_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> PriceHistoryEntry:
        return cls(
            id=payload["id"],
            product_link_id=ProductLinkId(payload["product_link_id"]),
            price=float(payload["price"]),
            currency=payload.get("currency") or DEFAULT_CURRENCY,
            recorded_at=datetime.fromisoformat(payload["recorded_at"]),
        )


@dataclass
class Product:
    id: ProductId
    board_id: BoardId
    owner: UserId
    name: str
    created_at: datetime
    updated_at: datetime
    image_url: Optional[str] = None
    note: Optional[str] = None
    ai_note: Optional[str] = None
    current_price: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    price_alert_enabled: bool = False
    target_price: Optional[float] = None
    links: list[ProductLink] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        board_id: BoardId,
        owner: UserId,
        name: str,
        image_url: Optional[str] = None,
        note: Optional[str] = None,
        current_price: Optional[float] = None,
        currency: Optional[str] = None,
    ) -> Product:
        if not name or not name.strip():
            raise DomainValidationError("Product name cannot be empty")
        now = datetime.now(timezone.utc)
        return cls(
            id=ProductId.generate(),
            board_id=board_id,
            owner=owner,
            name=name.strip(),
            image_url=image_url or None,
            note=(note or "").strip() or None,
            current_price=current_price,
            currency=currency or DEFAULT_CURRENCY,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner.value == user_id.value

    def apply_changes(self, changes: dict[str, Any]) -> None:
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise DomainValidationError(
                f"Cannot update product fields: {', '.join(sorted(unknown))}"
            )
        if "name" in changes and not (changes["name"] or "").strip():
            raise DomainValidationError("Product name cannot be empty")
        if "currency" in changes and not (changes["currency"] or "").strip():
            raise DomainValidationError("Currency cannot be empty")
        if "price_alert_enabled" in changes and changes["price_alert_enabled"] is None:
            raise DomainValidationError("price_alert_enabled must be true or false")
        for key in ("current_price", "target_price"):
            if changes.get(key) is not None and changes[key] < 0:
                raise DomainValidationError(f"{key} must be a non-negative number")
        for key, value in changes.items():
            setattr(self, key, value.strip() if isinstance(value, str) else value)
        self.updated_at = datetime.now(timezone.utc)

    def move_to(self, board_id: BoardId) -> None:
        self.board_id = board_id
        self.updated_at = datetime.now(timezone.utc)
