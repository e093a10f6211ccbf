"""Delete Product Command (idempotent, links and prices cascade)."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.exceptions import AccessDeniedError
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class DeleteProductCommand(Command[bool]):
    product_id: ProductId
    user_id: UserId


class DeleteProductHandler(CommandHandler[bool]):
    def __init__(self, product_repository: ProductRepository):
        self._product_repository = product_repository

    async def execute(self, command: DeleteProductCommand) -> bool:
        product = await self._product_repository.get_by_id(command.product_id)
        if not product:
            return False
        if not product.is_owned_by(command.user_id):
            raise AccessDeniedError("You don't have access to this product")
        return await self._product_repository.delete(command.product_id)
