"""
Event Feed Port - insert-notification channel of the persistent store.

Delivery contract:
- every event published after `subscribe()` returns is delivered, in publish
  order, at least once (consumers de-duplicate by id)
- `Subscription.release()` stops delivery and frees the channel; calling it
  again is a no-op and it never raises
Implementation: productboards/infrastructure/messaging/redis_event_feed.py
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Union

EventPayload = dict[str, Any]
EventHandler = Callable[[EventPayload], Optional[Awaitable[None]]]


def message_channel(conversation_id: Union[str, Any]) -> str:
    return f"messages:{conversation_id}"


def price_channel(product_link_id: Union[str, Any]) -> str:
    return f"price_history:{product_link_id}"


class Subscription(ABC):
    @property
    @abstractmethod
    def active(self) -> bool: ...

    @abstractmethod
    async def release(self) -> None: ...


class EventFeed(ABC):
    @abstractmethod
    async def publish(self, channel: str, payload: EventPayload) -> None: ...

    @abstractmethod
    async def subscribe(self, channel: str, on_event: EventHandler) -> Subscription: ...
