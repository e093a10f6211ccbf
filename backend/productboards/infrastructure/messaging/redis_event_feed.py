"""
Redis Event Feed - insert notifications over Redis pub/sub.

Channel layout:
- "{prefix}:messages:{conversation_id}"        → message rows
- "{prefix}:price_history:{product_link_id}"   → price history rows

Each subscription owns one PubSub connection and one pump task that decodes
JSON payloads and hands them to the subscriber's handler in publish order.
`subscribe()` returns only after Redis confirmed the SUBSCRIBE, so every
event published afterwards reaches the handler.

Error Handling:
- A failing handler is logged and counted; the pump keeps running
- Undecodable payloads are dropped with a warning
- release() never raises; the second call is a no-op
"""

import asyncio
import inspect
import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.asyncio.client import PubSub

from productboards.config.settings import Config
from productboards.domain.ports.event_feed import (
    EventFeed,
    EventHandler,
    EventPayload,
    Subscription,
)
from productboards.observability.metrics import (
    MetricsErrorType,
    increment_error,
    increment_feed_delivery,
)

logger = logging.getLogger(__name__)

SUBSCRIBE_CONFIRM_TIMEOUT = 5.0


async def create_redis_client() -> Redis:
    """
    Create async Redis client with connection pool.

    Raises:
        redis.ConnectionError: If Redis is not reachable
    """
    client = redis.from_url(
        Config.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5.0,
    )
    await client.ping()
    logger.info(f"[Redis] Connected to {Config.REDIS_URL}")
    return client


async def close_redis_client(client: Redis) -> None:
    if client:
        await client.aclose()
        logger.info("[Redis] Connection closed")


class RedisSubscription(Subscription):
    def __init__(
        self, channel: str, full_channel: str, pubsub: PubSub, on_event: EventHandler
    ):
        self._channel = channel
        self._full_channel = full_channel
        self._pubsub = pubsub
        self._on_event = on_event
        self._task: Optional[asyncio.Task] = None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        self._task = asyncio.create_task(
            self._pump(), name=f"feed:{self._full_channel}"
        )

    async def _pump(self) -> None:
        async for message in self._pubsub.listen():
            if message.get("type") != "message":
                continue
            try:
                payload = json.loads(message["data"])
            except (TypeError, ValueError) as e:
                increment_feed_delivery(self._channel, "dropped")
                logger.warning(f"[Feed] Undecodable event on {self._channel}: {e}")
                continue
            try:
                result = self._on_event(payload)
                if inspect.isawaitable(result):
                    await result
                increment_feed_delivery(self._channel, "delivered")
            except Exception as e:
                increment_feed_delivery(self._channel, "failed")
                increment_error(MetricsErrorType.FEED_HANDLER_FAILED)
                logger.warning(f"[Feed] Handler failed on {self._channel}: {e}")

    async def release(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"[Feed] Pump for {self._channel} ended with error: {e}")
        try:
            await self._pubsub.unsubscribe(self._full_channel)
            await self._pubsub.aclose()
        except Exception as e:
            logger.warning(f"[Feed] Release of {self._channel} failed: {e}")
        logger.debug(f"[Feed] Released {self._channel}")


class RedisEventFeed(EventFeed):
    def __init__(self, redis_client: Redis, prefix: str = Config.FEED_CHANNEL_PREFIX):
        self._redis = redis_client
        self._prefix = prefix

    def _prefixed(self, channel: str) -> str:
        return f"{self._prefix}:{channel}" if self._prefix else channel

    async def publish(self, channel: str, payload: EventPayload) -> None:
        full = self._prefixed(channel)
        receivers = await self._redis.publish(full, json.dumps(payload, default=str))
        logger.debug(f"[Feed] Published to {full} ({receivers} receivers)")

    async def subscribe(self, channel: str, on_event: EventHandler) -> Subscription:
        full = self._prefixed(channel)
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(full)
        await self._wait_for_confirmation(pubsub, full)

        subscription = RedisSubscription(channel, full, pubsub, on_event)
        subscription.start()
        logger.debug(f"[Feed] Subscribed to {full}")
        return subscription

    async def _wait_for_confirmation(self, pubsub: PubSub, channel: str) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + SUBSCRIBE_CONFIRM_TIMEOUT
        while loop.time() < deadline:
            message = await pubsub.get_message(timeout=deadline - loop.time())
            if message and message.get("type") == "subscribe":
                return
        await pubsub.aclose()
        raise TimeoutError(f"Redis did not confirm subscription to {channel}")
