"""Observability package for the ProductBoards backend."""

from productboards.observability.metrics import (
    increment_active_sends,
    decrement_active_sends,
    observe_request_latency,
    observe_ai_latency,
    observe_ai_tokens,
    increment_feed_delivery,
    increment_error,
    get_metrics_content,
    MetricsErrorType,
)

__all__ = [
    "increment_active_sends",
    "decrement_active_sends",
    "observe_request_latency",
    "observe_ai_latency",
    "observe_ai_tokens",
    "increment_feed_delivery",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
]
