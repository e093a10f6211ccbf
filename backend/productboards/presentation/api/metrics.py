"""
Prometheus Metrics Endpoint.

DATA FLOW:
    observability/metrics.py         This file                    Scraper
    ────────────────────────         ─────────                    ───────
    Define & record metrics ──────►  /metrics endpoint ──────────► Prometheus

Test with: curl http://localhost:5001/metrics
"""

from fastapi import APIRouter, Response

from productboards.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Returns metrics in Prometheus text format."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
