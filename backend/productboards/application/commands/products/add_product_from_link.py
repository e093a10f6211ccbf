"""
Add Product From Link Command.

0. URL must not be blank (before any AI call)
1. Board ownership gate
2. AI extraction of the product fields from the URL  → AiUnavailableError is terminal
3. Create the product and its link (initial price entry when a price was found)
4. AI note                                           → best-effort
"""

import logging
from dataclasses import dataclass

from productboards.application.commands.products.generate_product_note import (
    GenerateProductNoteCommand,
    GenerateProductNoteHandler,
)
from productboards.application.common.interfaces import Command, CommandHandler
from productboards.application.services.ai_calls import call_ai
from productboards.application.services.authorization import OwnershipGuard
from productboards.config.settings import Config
from productboards.domain.entities.product import PriceHistoryEntry, Product, ProductLink
from productboards.domain.exceptions import DomainValidationError
from productboards.domain.ports.ai_assistant import AiAssistant
from productboards.domain.ports.repositories import ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.user_id import UserId
from productboards.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddProductFromLinkCommand(Command[Product]):
    board_id: BoardId
    user_id: UserId
    url: str
    ai_timeout: float = Config.AI_TIMEOUT_SECONDS


class AddProductFromLinkHandler(CommandHandler[Product]):
    def __init__(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        assistant: AiAssistant,
        note_handler: GenerateProductNoteHandler,
    ):
        self._guard = guard
        self._product_repository = product_repository
        self._assistant = assistant
        self._note_handler = note_handler

    async def execute(self, command: AddProductFromLinkCommand) -> Product:
        url = (command.url or "").strip()
        if not url:
            raise DomainValidationError("url is required")
        await self._guard.board(command.board_id, command.user_id)

        extracted = await call_ai(
            self._assistant.extract_product(url),
            command.ai_timeout,
            operation="extract product",
        )

        product = Product.create(
            board_id=command.board_id,
            owner=command.user_id,
            name=extracted.name,
            image_url=extracted.image_url,
            current_price=extracted.price,
            currency=extracted.currency,
        )
        link = ProductLink.create(
            product_id=product.id,
            url=url,
            retailer=extracted.retailer,
            current_price=extracted.price,
            currency=product.currency,
        )
        await self._product_repository.save(product)
        await self._product_repository.save_link(link)
        if extracted.price is not None:
            await self._product_repository.add_price(
                PriceHistoryEntry.create(link.id, extracted.price, link.currency)
            )
        product.links.append(link)
        logger.info(
            f"Product {product.id.value} created from link on board "
            f"{command.board_id.value}"
        )

        try:
            noted = await self._note_handler.execute(
                GenerateProductNoteCommand(
                    product_id=product.id,
                    user_id=command.user_id,
                    ai_timeout=command.ai_timeout,
                )
            )
            product.ai_note = noted.ai_note
        except Exception as e:
            increment_error(MetricsErrorType.BEST_EFFORT_STEP_FAILED)
            logger.warning(f"AI note for product {product.id.value} failed: {e}")

        return product
