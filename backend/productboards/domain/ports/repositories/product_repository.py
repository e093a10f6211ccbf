"""
Product Repository Port - products, their links and price history.
Implementation: productboards/infrastructure/persistence/prisma_product_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from productboards.domain.entities.product import PriceHistoryEntry, Product, ProductLink
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Product joined with its links."""
        ...

    @abstractmethod
    async def get_by_board(self, board_id: BoardId) -> list[Product]:
        """Products of a board joined with their links, newest first."""
        ...

    @abstractmethod
    async def save(self, product: Product) -> None:
        """Create or update the product row (links are written separately)."""
        ...

    @abstractmethod
    async def delete(self, product_id: ProductId) -> bool: ...

    @abstractmethod
    async def get_link(self, link_id: ProductLinkId) -> Optional[ProductLink]: ...

    @abstractmethod
    async def save_link(self, link: ProductLink) -> None: ...

    @abstractmethod
    async def add_price(self, entry: PriceHistoryEntry) -> None: ...

    @abstractmethod
    async def get_price_history(
        self, link_id: ProductLinkId
    ) -> list[PriceHistoryEntry]:
        """Price entries ascending by recorded_at."""
        ...
