"""Move Product Command - both the source and target board must be the caller's."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.authorization import OwnershipGuard
from productboards.domain.entities.product import Product
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class MoveProductCommand(Command[Product]):
    product_id: ProductId
    user_id: UserId
    to_board_id: BoardId


class MoveProductHandler(CommandHandler[Product]):
    def __init__(self, guard: OwnershipGuard, product_repository: ProductRepository):
        self._guard = guard
        self._product_repository = product_repository

    async def execute(self, command: MoveProductCommand) -> Product:
        product = await self._guard.product(command.product_id, command.user_id)
        await self._guard.board(product.board_id, command.user_id)
        await self._guard.board(command.to_board_id, command.user_id)

        if product.board_id == command.to_board_id:
            return product
        product.move_to(command.to_board_id)
        await self._product_repository.save(product)
        return product
