"""Product DTOs for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from productboards.domain.entities.product import PriceHistoryEntry, Product, ProductLink


class ProductLinkDTO(BaseModel):
    id: str
    product_id: str
    url: str
    retailer: Optional[str] = None
    current_price: Optional[float] = None
    currency: str
    last_checked_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, link: ProductLink) -> "ProductLinkDTO":
        return cls(
            id=link.id.value,
            product_id=link.product_id.value,
            url=link.url,
            retailer=link.retailer,
            current_price=link.current_price,
            currency=link.currency,
            last_checked_at=link.last_checked_at,
            created_at=link.created_at,
        )


class ProductDTO(BaseModel):
    id: str
    board_id: str
    name: str
    image_url: Optional[str] = None
    note: Optional[str] = None
    ai_note: Optional[str] = None
    current_price: Optional[float] = None
    currency: str
    price_alert_enabled: bool = False
    target_price: Optional[float] = None
    created_at: datetime
    updated_at: datetime
    links: list[ProductLinkDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id.value,
            board_id=product.board_id.value,
            name=product.name,
            image_url=product.image_url,
            note=product.note,
            ai_note=product.ai_note,
            current_price=product.current_price,
            currency=product.currency,
            price_alert_enabled=product.price_alert_enabled,
            target_price=product.target_price,
            created_at=product.created_at,
            updated_at=product.updated_at,
            links=[ProductLinkDTO.from_entity(link) for link in product.links],
        )


class PriceHistoryDTO(BaseModel):
    id: str
    product_link_id: str
    price: float
    currency: str
    recorded_at: datetime

    @classmethod
    def from_entity(cls, entry: PriceHistoryEntry) -> "PriceHistoryDTO":
        return cls(
            id=entry.id,
            product_link_id=entry.product_link_id.value,
            price=entry.price,
            currency=entry.currency,
            recorded_at=entry.recorded_at,
        )
