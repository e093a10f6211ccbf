"""Create Product Command."""

from dataclasses import dataclass
from typing import Optional

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import Product
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class CreateProductCommand(Command[Product]):
    board_id: BoardId
    user_id: UserId
    name: str
    image_url: Optional[str] = None
    note: Optional[str] = None
    current_price: Optional[float] = None
    currency: Optional[str] = None


class CreateProductHandler(CommandHandler[Product]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, command: CreateProductCommand) -> Product:
        await self._guard.board(command.board_id, command.user_id)
        product = Product.create(
            board_id=command.board_id,
            owner=command.user_id,
            name=command.name,
            image_url=command.image_url,
            note=command.note,
            current_price=command.current_price,
            currency=command.currency,
        )
        await self._product_repository.save(product)
        return product
