"""
Prisma Product Repository Implementation.

Products are read joined with their links (`include={"links": True}`); links
and price history rows are written through their own methods.
"""

from typing import Optional

from prisma import Prisma
from prisma.models import PriceHistory as PrismaPriceHistory
from prisma.models import Product as PrismaProduct
from prisma.models import ProductLink as PrismaProductLink

from productboards.domain.entities.product import PriceHistoryEntry, Product, ProductLink
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId
from productboards.infrastructure.persistence.errors import store_errors

LINKS_INCLUDE = {"links": {"order_by": {"created_at": "asc"}}}


class PrismaProductRepository(ProductRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _link_to_entity(self, record: PrismaProductLink) -> ProductLink:
        return ProductLink(
            id=ProductLinkId(record.id),
            product_id=ProductId(record.product_id),
            url=record.url,
            retailer=record.retailer,
            current_price=record.current_price,
            currency=record.currency,
            last_checked_at=record.last_checked_at,
            created_at=record.created_at,
        )

    def _to_entity(self, record: PrismaProduct) -> Product:
        return Product(
            id=ProductId(record.id),
            board_id=BoardId(record.board_id),
            owner=UserId(record.user_id),
            name=record.name,
            image_url=record.image_url,
            note=record.note,
            ai_note=record.ai_note,
            current_price=record.current_price,
            currency=record.currency,
            price_alert_enabled=record.price_alert_enabled,
            target_price=record.target_price,
            created_at=record.created_at,
            updated_at=record.updated_at,
            links=[self._link_to_entity(link) for link in record.links or []],
        )

    def _price_to_entity(self, record: PrismaPriceHistory) -> PriceHistoryEntry:
        return PriceHistoryEntry(
            id=record.id,
            product_link_id=ProductLinkId(record.product_link_id),
            price=record.price,
            currency=record.currency,
            recorded_at=record.recorded_at,
        )

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        with store_errors("get product"):
            record = await self._prisma.product.find_unique(
                where={"id": product_id.value}, include=LINKS_INCLUDE
            )
        return self._to_entity(record) if record else None

    async def get_by_board(self, board_id: BoardId) -> list[Product]:
        with store_errors("list products"):
            records = await self._prisma.product.find_many(
                where={"board_id": board_id.value},
                order={"created_at": "desc"},
                include=LINKS_INCLUDE,
            )
        return [self._to_entity(record) for record in records]

    async def save(self, product: Product) -> None:
        fields = {
            "board_id": product.board_id.value,
            "name": product.name,
            "image_url": product.image_url,
            "note": product.note,
            "ai_note": product.ai_note,
            "current_price": product.current_price,
            "currency": product.currency,
            "price_alert_enabled": product.price_alert_enabled,
            "target_price": product.target_price,
            "updated_at": product.updated_at,
        }
        with store_errors("save product"):
            await self._prisma.product.upsert(
                where={"id": product.id.value},
                data={
                    "create": {
                        "id": product.id.value,
                        "user_id": product.owner.value,
                        "created_at": product.created_at,
                        **fields,
                    },
                    "update": fields,
                },
            )

    async def delete(self, product_id: ProductId) -> bool:
        with store_errors("delete product"):
            count = await self._prisma.product.delete_many(
                where={"id": product_id.value}
            )
        return count > 0

    async def get_link(self, link_id: ProductLinkId) -> Optional[ProductLink]:
        with store_errors("get product link"):
            record = await self._prisma.productlink.find_unique(
                where={"id": link_id.value}
            )
        return self._link_to_entity(record) if record else None

    async def save_link(self, link: ProductLink) -> None:
        fields = {
            "url": link.url,
            "retailer": link.retailer,
            "current_price": link.current_price,
            "currency": link.currency,
            "last_checked_at": link.last_checked_at,
        }
        with store_errors("save product link"):
            await self._prisma.productlink.upsert(
                where={"id": link.id.value},
                data={
                    "create": {
                        "id": link.id.value,
                        "product_id": link.product_id.value,
                        "created_at": link.created_at,
                        **fields,
                    },
                    "update": fields,
                },
            )

    async def add_price(self, entry: PriceHistoryEntry) -> None:
        with store_errors("record price"):
            await self._prisma.pricehistory.create(
                data={
                    "id": entry.id,
                    "product_link_id": entry.product_link_id.value,
                    "price": entry.price,
                    "currency": entry.currency,
                    "recorded_at": entry.recorded_at,
                }
            )

    async def get_price_history(
        self, link_id: ProductLinkId
    ) -> list[PriceHistoryEntry]:
        with store_errors("load price history"):
            records = await self._prisma.pricehistory.find_many(
                where={"product_link_id": link_id.value},
                order={"recorded_at": "asc"},
            )
        return [self._price_to_entity(record) for record in records]
