"""Server-Sent Events framing."""

import json
from typing import Any

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

KEEPALIVE_SECONDS = 15.0


def sse_event(event: str, data: Any, event_id: str = "") -> str:
    lines = [f"event: {event}"]
    if event_id:
        lines.append(f"id: {event_id}")
    lines.append(f"data: {json.dumps(data, default=str)}")
    return "\n".join(lines) + "\n\n"


def sse_comment(text: str = "keep-alive") -> str:
    return f": {text}\n\n"
