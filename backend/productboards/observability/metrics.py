"""
Prometheus Metrics for the ProductBoards backend.

DATA FLOW:
    This file                  presentation/api/metrics.py         Observability Stack
    ─────────                  ────────────────────────────         ───────────────────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus ──► Grafana

METRIC TYPES:
    - Gauge: Value goes up/down (sends in flight)
    - Counter: Value only goes up (feed deliveries, price alerts, errors)
    - Histogram: Distribution (latency, token usage)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
ACTIVE_SENDS = Gauge(
    "productboards_active_sends", "Number of send pipelines currently running"
)

REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60],
)

AI_LATENCY = Histogram(
    "productboards_ai_latency_seconds",
    "Latency of AI gateway calls in seconds",
    ["operation"],
    buckets=[0.5, 1, 2, 5, 10, 20, 40, 60],
)

AI_TOKENS_TOTAL = Histogram(
    "productboards_ai_tokens_total",
    "Number of AI tokens used per call",
    ["type", "model"],
    buckets=[100, 500, 1000, 2000, 5000, 10000, 20000],
)

FEED_DELIVERIES_TOTAL = Counter(
    "productboards_feed_deliveries_total",
    "Insert-feed events delivered to subscribers",
    ["channel_kind", "outcome"],
)

PRICE_ALERTS_TOTAL = Counter(
    "productboards_price_alerts_total",
    "Price alerts raised when a price is recorded",
    ["reason"],
)

ERRORS_TOTAL = Counter(
    "productboards_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class MetricsErrorType:
    """Error type labels for productboards_errors_total metric."""

    AI_UNAVAILABLE = "ai_unavailable"
    AI_TIMEOUT = "ai_timeout"
    STORE_FAILED = "store_failed"
    FEED_PUBLISH_FAILED = "feed_publish_failed"
    FEED_HANDLER_FAILED = "feed_handler_failed"
    BEST_EFFORT_STEP_FAILED = "best_effort_step_failed"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================
def increment_active_sends() -> None:
    ACTIVE_SENDS.inc()


def decrement_active_sends() -> None:
    ACTIVE_SENDS.dec()


def observe_request_latency(
    method: str, route: str, status_code: int, seconds: float
) -> None:
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(seconds)


def observe_ai_latency(operation: str, seconds: float) -> None:
    AI_LATENCY.labels(operation=operation).observe(seconds)


def observe_ai_tokens(token_type: str, model: str, count: int) -> None:
    if count:
        AI_TOKENS_TOTAL.labels(type=token_type, model=model).observe(count)


def increment_feed_delivery(channel: str, outcome: str) -> None:
    FEED_DELIVERIES_TOTAL.labels(
        channel_kind=channel.split(":", 1)[0], outcome=outcome
    ).inc()


def increment_price_alert(reason: str) -> None:
    PRICE_ALERTS_TOTAL.labels(reason=reason).inc()


def increment_error(error_type: str) -> None:
    ERRORS_TOTAL.labels(error_type=error_type).inc()


def get_metrics_content() -> tuple[bytes, str]:
    """Return metrics in Prometheus text format and the matching content type."""
    return generate_latest(), CONTENT_TYPE_LATEST
