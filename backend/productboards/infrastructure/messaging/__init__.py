"""
Messaging - the insert feed.

- redis_event_feed.py         → EventFeed over Redis pub/sub
- notifying_repositories.py   → repository decorators that publish inserts
"""

from productboards.infrastructure.messaging.redis_event_feed import (
    RedisEventFeed,
    RedisSubscription,
    create_redis_client,
    close_redis_client,
)
from productboards.infrastructure.messaging.notifying_repositories import (
    NotifyingMessageRepository,
    NotifyingProductRepository,
)

__all__ = [
    "RedisEventFeed",
    "RedisSubscription",
    "create_redis_client",
    "close_redis_client",
    "NotifyingMessageRepository",
    "NotifyingProductRepository",
]
