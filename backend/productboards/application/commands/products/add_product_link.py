"""Add Product Link Command."""

from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import PriceHistoryEntry, ProductLink
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class AddProductLinkCommand(Command[ProductLink]):
    product_id: ProductId
    user_id: UserId
    url: str
    retailer: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None


class AddProductLinkHandler(CommandHandler[ProductLink]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, command: AddProductLinkCommand) -> ProductLink:
        product = await self._guard.product(command.product_id, command.user_id)
        link = ProductLink.create(
            product_id=product.id,
            url=command.url,
            retailer=command.retailer,
            current_price=command.price,
            currency=command.currency or product.currency,
        )
        # Validate the initial price before anything is written
        entry = (
            PriceHistoryEntry.create(link.id, command.price, link.currency)
            if command.price is not None
            else None
        )

        await self._product_repository.save_link(link)
        if entry:
            await self._product_repository.add_price(entry)
        product.links.append(link)
        return link
