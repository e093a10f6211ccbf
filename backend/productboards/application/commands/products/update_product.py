"""Update Product Command - partial update of the editable fields."""

from dataclasses import dataclass, field
from typing import Any

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import Product
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class UpdateProductCommand(Command[Product]):
    product_id: ProductId
    user_id: UserId
    changes: dict[str, Any] = field(default_factory=dict)


class UpdateProductHandler(CommandHandler[Product]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, command: UpdateProductCommand) -> Product:
        product = await self._guard.product(command.product_id, command.user_id)
        if command.changes:
            product.apply_changes(command.changes)
            await self._product_repository.save(product)
        return product
