"""
Notifying Repositories - Decorator pattern for insert notifications.

Architecture:
    NotifyingMessageRepository (decorator)
        ↓ wraps
    PrismaMessageRepository (concrete implementation)
        ↓ implements
    MessageRepository (abstract interface)

Write path: write to the store first (source of truth), then publish the row
snapshot on the feed. A failed publish never fails the write; subscribers
catch up from the next load.
"""

import logging
from typing import Optional

from productboards.domain.entities.message import Message
from productboards.domain.entities.product import PriceHistoryEntry, Product, ProductLink
from productboards.domain.ports.event_feed import (
    EventFeed,
    EventPayload,
    message_channel,
    price_channel,
)
from productboards.domain.ports.repositories import MessageRepository, ProductRepository
from productboards.domain.value_objects.board_id import BoardId
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.product_id import ProductId
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


async def _publish(feed: EventFeed, channel: str, payload: EventPayload) -> None:
    try:
        await feed.publish(channel, payload)
    except Exception as e:
        increment_error(MetricsErrorType.FEED_PUBLISH_FAILED)
        logger.warning(f"[Feed] Publish to {channel} failed: {e}")


class NotifyingMessageRepository(MessageRepository):
    """Decorator: publishes every inserted message on its conversation channel."""

    def __init__(self, repo: MessageRepository, feed: EventFeed):
        self._repo = repo
        self._feed = feed

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: Optional[int] = None
    ) -> list[Message]:
        return await self._repo.get_by_conversation(conversation_id, limit)

    async def add(self, message: Message) -> None:
        await self._repo.add(message)
        await _publish(
            self._feed,
            message_channel(message.conversation_id.value),
            message.to_payload(),
        )


class NotifyingProductRepository(ProductRepository):
    """Decorator: publishes every recorded price on its link channel."""

    def __init__(self, repo: ProductRepository, feed: EventFeed):
        self._repo = repo
        self._feed = feed

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        return await self._repo.get_by_id(product_id)

    async def get_by_board(self, board_id: BoardId) -> list[Product]:
        return await self._repo.get_by_board(board_id)

    async def save(self, product: Product) -> None:
        await self._repo.save(product)

    async def delete(self, product_id: ProductId) -> bool:
        return await self._repo.delete(product_id)

    async def get_link(self, link_id: ProductLinkId) -> Optional[ProductLink]:
        return await self._repo.get_link(link_id)

    async def save_link(self, link: ProductLink) -> None:
        await self._repo.save_link(link)

    async def add_price(self, entry: PriceHistoryEntry) -> None:
        await self._repo.add_price(entry)
        await _publish(
            self._feed, price_channel(entry.product_link_id.value), entry.to_payload()
        )

    async def get_price_history(
        self, link_id: ProductLinkId
    ) -> list[PriceHistoryEntry]:
        return await self._repo.get_price_history(link_id)
