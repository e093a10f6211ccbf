"""
Transcript helpers for the send pipeline.
"""

from typing import Optional

from productboards.domain.entities.message import Message

TITLE_PREVIEW_LENGTH = 50
ELLIPSIS = "..."


def fold_image_ref(
    transcript: list[dict[str, str]], image_ref: Optional[str]
) -> list[dict[str, str]]:
    """Prefix the latest user turn with a textual note about an attached image."""
    if not image_ref:
        return transcript
    for turn in reversed(transcript):
        if turn["role"] == "user":
            turn["content"] = f"[User shared an image: {image_ref}]\n\n{turn['content']}"
            break
    return transcript


def build_transcript(
    messages: list[Message], image_ref: Optional[str] = None
) -> list[dict[str, str]]:
    """Role+content pairs for the AI, metadata stripped."""
    transcript = [{"role": m.role, "content": m.content} for m in messages]
    return fold_image_ref(transcript, image_ref)


def is_first_exchange(transcript: list) -> bool:
    # Concurrent sends can both see a short transcript; accepted race.
    return len(transcript) <= 1


def derive_title(content: str, limit: int = TITLE_PREVIEW_LENGTH) -> str:
    title = content[:limit]
    if len(content) > limit:
        title += ELLIPSIS
    return title
