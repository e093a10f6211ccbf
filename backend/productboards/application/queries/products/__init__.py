"""Product-related queries."""

from .list_products import ListProductsQuery, ListProductsHandler
from .get_product import GetProductQuery, GetProductHandler
from .get_price_history import GetPriceHistoryQuery, GetPriceHistoryHandler

__all__ = [
    "ListProductsQuery",
    "ListProductsHandler",
    "GetProductQuery",
    "GetProductHandler",
    "GetPriceHistoryQuery",
    "GetPriceHistoryHandler",
]
