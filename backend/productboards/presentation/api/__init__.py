"""
API Routers - FastAPI endpoint definitions.
"""

from productboards.presentation.api.conversations import router as conversations_router
from productboards.presentation.api.ai import router as ai_router
from productboards.presentation.api.boards import router as boards_router
from productboards.presentation.api.products import (
    router as products_router,
    links_router as product_links_router,
)
from productboards.presentation.api.shared import router as shared_router
from productboards.presentation.api.alert_preferences import (
    router as alert_preferences_router,
)
from productboards.presentation.api.metrics import router as metrics_router

__all__ = [
    "conversations_router",
    "ai_router",
    "boards_router",
    "products_router",
    "product_links_router",
    "shared_router",
    "alert_preferences_router",
    "metrics_router",
]
