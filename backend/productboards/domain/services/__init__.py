"""
DOMAIN SERVICES - Pure logic over entities (no I/O)

- message_timeline.py → id-unique, time-ordered merge of message sources
- recency.py          → Today / Yesterday / Previous 7 Days / Older buckets
- transcript.py       → AI transcript building and first-exchange titles
- price_alerts.py     → target-price and price-drop alerts for a recorded price
"""

from productboards.domain.services.message_timeline import MessageTimeline
from productboards.domain.services.recency import (
    RecencyBucket,
    bucket_for,
    group_by_recency,
)
from productboards.domain.services.price_alerts import PriceAlert, detect_price_alerts
from productboards.domain.services.transcript import (
    build_transcript,
    fold_image_ref,
    derive_title,
    is_first_exchange,
)

__all__ = [
    "MessageTimeline",
    "RecencyBucket",
    "bucket_for",
    "group_by_recency",
    "build_transcript",
    "fold_image_ref",
    "derive_title",
    "is_first_exchange",
    "PriceAlert",
    "detect_price_alerts",
]
