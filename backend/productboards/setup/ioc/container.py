"""
Dishka DI Container Setup.

Flow:
  Container → provides → PrismaConversationRepository → to → CreateConversationHandler
                                    ↓
                            uses ConversationRepository interface

Infrastructure lives here so that importing the application layer never
requires a generated Prisma client.
"""

import logging
from typing import AsyncIterator

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from openai import AsyncOpenAI
from prisma import Prisma
from redis.asyncio import Redis

from productboards.config.settings import Config
from productboards.domain.ports.ai_assistant import AiAssistant
from productboards.domain.ports.event_feed import EventFeed
from productboards.domain.ports.repositories import (
    AlertPreferencesRepository,
    BoardRepository,
    ConversationRepository,
    MessageRepository,
    ProductRepository,
)
from productboards.infrastructure.ai import OpenAiAssistant, create_ai_client
from productboards.infrastructure.messaging import (
    NotifyingMessageRepository,
    NotifyingProductRepository,
    RedisEventFeed,
    close_redis_client,
    create_redis_client,
)
from productboards.infrastructure.persistence import (
    PrismaAlertPreferencesRepository,
    PrismaBoardRepository,
    PrismaConversationRepository,
    PrismaMessageRepository,
    PrismaProductRepository,
)
from productboards.setup.ioc.providers import ApplicationProvider

logger = logging.getLogger(__name__)


class InfrastructureProvider(Provider):
    """Concrete adapters for the domain ports."""

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterator[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        Connected on first use, disconnected when the container closes.
        """
        prisma = Prisma()
        await prisma.connect()
        logger.info("[Prisma] Connected")
        yield prisma
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")

    # ==================== REDIS / FEED ====================

    @provide(scope=Scope.APP)
    async def get_redis(self) -> AsyncIterator[Redis]:
        client = await create_redis_client()
        yield client
        await close_redis_client(client)

    @provide(scope=Scope.APP)
    def get_event_feed(self, redis_client: Redis) -> EventFeed:
        return RedisEventFeed(redis_client, prefix=Config.FEED_CHANNEL_PREFIX)

    # ==================== AI ====================

    @provide(scope=Scope.APP)
    async def get_ai_client(self) -> AsyncIterator[AsyncOpenAI]:
        client = create_ai_client()
        yield client
        await client.close()

    @provide(scope=Scope.APP)
    def get_ai_assistant(self, client: AsyncOpenAI) -> AiAssistant:
        return OpenAiAssistant(client, model=Config.AI_MODEL)

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(
        self, prisma: Prisma, feed: EventFeed
    ) -> MessageRepository:
        """Inserts are published on the conversation's feed channel."""
        return NotifyingMessageRepository(PrismaMessageRepository(prisma), feed)

    @provide(scope=Scope.REQUEST)
    def get_board_repository(self, prisma: Prisma) -> BoardRepository:
        return PrismaBoardRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_product_repository(
        self, prisma: Prisma, feed: EventFeed
    ) -> ProductRepository:
        """Recorded prices are published on the link's feed channel."""
        return NotifyingProductRepository(PrismaProductRepository(prisma), feed)

    @provide(scope=Scope.REQUEST)
    def get_alert_preferences_repository(
        self, prisma: Prisma
    ) -> AlertPreferencesRepository:
        return PrismaAlertPreferencesRepository(prisma)


def create_container() -> AsyncContainer:
    return make_async_container(InfrastructureProvider(), ApplicationProvider())
