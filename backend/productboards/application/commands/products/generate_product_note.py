"""Generate Product Note Command - short AI note stored on the product."""

import logging
from dataclasses import dataclass

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.ai_calls import call_ai
from productboards.application.services.authorization import OwnershipGuard
from productboards.config.settings import Config
from productboards.domain.entities.product import Product
from productboards.domain.ports.ai_assistant import AiAssistant
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateProductNoteCommand(Command[Product]):
    product_id: ProductId
    user_id: UserId
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class GenerateProductNoteHandler(CommandHandler[Product]):
    def __init__(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        assistant: AiAssistant,
    ):
        self._guard = guard
        self._product_repository = product_repository
        self._assistant = assistant

    async def execute(self, command: GenerateProductNoteCommand) -> Product:
        # Ownership is checked before the AI is called
        product = await self._guard.product(command.product_id, command.user_id)

        note = await call_ai(
            self._assistant.product_note(product.name, product.current_price),
            command.ai_timeout,
            operation="product note",
        )
        product.ai_note = note.strip()
        await self._product_repository.save(product)
        logger.info(f"AI note stored for product {product.id.value}")
        return product
