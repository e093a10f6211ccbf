"""AI gateway adapter."""

from productboards.infrastructure.ai.openai_assistant import (
    OpenAiAssistant,
    create_ai_client,
)

__all__ = [
    "OpenAiAssistant",
    "create_ai_client",
]
