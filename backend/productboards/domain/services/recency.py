"""
Recency buckets for the conversation sidebar.

Buckets are computed at read time from `updated_at` against the current time
in the viewer's time zone:
- same calendar day            → Today
- previous calendar day        → Yesterday
- later than now minus 7 days  → Previous 7 Days
- everything else              → Older
"""

from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Optional

from productboards.domain.entities.conversation import Conversation


class RecencyBucket(str, Enum):
    TODAY = "Today"
    YESTERDAY = "Yesterday"
    PREVIOUS_7_DAYS = "Previous 7 Days"
    OLDER = "Older"


def bucket_for(
    updated_at: datetime, now: datetime, tz: Optional[tzinfo] = None
) -> RecencyBucket:
    tz = tz or timezone.utc
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local_updated = updated_at.astimezone(tz)
    local_now = now.astimezone(tz)
    day = local_updated.date()
    today = local_now.date()

    if day == today:
        return RecencyBucket.TODAY
    if day == today - timedelta(days=1):
        return RecencyBucket.YESTERDAY
    if updated_at > now - timedelta(days=7):
        return RecencyBucket.PREVIOUS_7_DAYS
    return RecencyBucket.OLDER


def group_by_recency(
    conversations: list[Conversation],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> dict[RecencyBucket, list[Conversation]]:
    """Partition conversations into buckets, newest first inside each bucket."""
    now = now or datetime.now(timezone.utc)
    groups: dict[RecencyBucket, list[Conversation]] = {
        bucket: [] for bucket in RecencyBucket
    }
    ordered = sorted(conversations, key=lambda c: c.updated_at, reverse=True)
    for conversation in ordered:
        groups[bucket_for(conversation.updated_at, now, tz)].append(conversation)
    return groups
