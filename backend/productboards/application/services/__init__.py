"""Application services shared by command and query handlers."""

from productboards.application.services.authorization import OwnershipGuard
from productboards.application.services.ai_calls import call_ai
from productboards.application.services.message_store import MessageStore
from productboards.application.services.live_messages import LiveMessageList
from productboards.application.services.price_watch import PriceWatch

__all__ = [
    "OwnershipGuard",
    "call_ai",
    "MessageStore",
    "LiveMessageList",
    "PriceWatch",
]
