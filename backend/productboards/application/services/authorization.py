"""
Ownership Guard - the authorization gate in front of every use case.

Handlers resolve the records they touch through the guard before any side
effect. Conversations and boards that belong to someone else are reported as
missing (they are invisible to the caller); products raise AccessDeniedError
because AI side effects on a foreign product are an explicit Forbidden.
"""

import logging

from productboards.domain.entities.board import Board
from productboards.domain.entities.conversation import Conversation
from productboards.domain.entities.product import Product, ProductLink
from productboards.domain.exceptions import AccessDeniedError, EntityNotFoundError
from productboards.domain.ports.repositories import (
    BoardRepository,
    ConversationRepository,
    ProductRepository,
)
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class OwnershipGuard:
    def __init__(
        self,
        conv_repo: ConversationRepository,
        board_repo: BoardRepository,
        product_repo: ProductRepository,
    ):
        self._conv_repo = conv_repo
        self._board_repo = board_repo
        self._product_repo = product_repo

    async def conversation(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        conversation = await self._conv_repo.get_by_id(conversation_id)
        if not conversation or not conversation.is_owned_by(user_id):
            raise EntityNotFoundError(f"Conversation {conversation_id.value} not found")
        return conversation

    async def board(self, board_id: BoardId, user_id: UserId) -> Board:
        board = await self._board_repo.get_by_id(board_id)
        if not board or not board.is_owned_by(user_id):
            raise EntityNotFoundError(f"Board {board_id.value} not found")
        return board

    async def product(self, product_id: ProductId, user_id: UserId) -> Product:
        product = await self._product_repo.get_by_id(product_id)
        if not product:
            raise EntityNotFoundError(f"Product {product_id.value} not found")
        if not product.is_owned_by(user_id):
            logger.warning(
                f"User {user_id.value} denied access to product {product_id.value}"
            )
            raise AccessDeniedError("You don't have access to this product")
        return product

    async def product_link(
        self, link_id: ProductLinkId, user_id: UserId
    ) -> tuple[Product, ProductLink]:
        link = await self._product_repo.get_link(link_id)
        if not link:
            raise EntityNotFoundError(f"Product link {link_id.value} not found")
        product = await self.product(link.product_id, user_id)
        return product, link
