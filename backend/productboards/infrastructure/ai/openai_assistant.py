"""
OpenAI-compatible AI gateway client (async).

Implements the AiAssistant port on top of AsyncOpenAI pointed at the
gateway's base URL. Every call goes through `chat_completion`, which records
latency and token usage and maps provider errors:

    429                      → AiUnavailableError(RATE_LIMITED)
    402                      → AiUnavailableError(QUOTA_EXHAUSTED)
    timeout                  → AiUnavailableError(TIMEOUT)
    other status / network   → AiUnavailableError(UPSTREAM_ERROR)
    empty or unusable output → AiUnavailableError(MALFORMED_RESPONSE)

Usage:
    client = create_ai_client()
    assistant = OpenAiAssistant(client, model=Config.AI_MODEL)
    reply = await assistant.reply([{"role": "user", "content": "Hello"}])
"""

import json
import logging
import time
from typing import Any, Optional

from httpx import Timeout
from langsmith import traceable
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from productboards.config.settings import Config
from productboards.domain.exceptions import AiFailureReason, AiUnavailableError
from productboards.domain.ports.ai_assistant import (
    AiAssistant,
    ChatReply,
    ExtractedProduct,
    ProductSummary,
)
from productboards.observability.metrics import observe_ai_latency, observe_ai_tokens
from productboards.prompts import ChatPrompts, ProductPrompts

logger = logging.getLogger(__name__)


def create_ai_client() -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=Config.AI_API_KEY or "missing-key",
        base_url=Config.AI_GATEWAY_URL,
        max_retries=Config.AI_MAX_RETRIES,
        timeout=Timeout(Config.AI_TIMEOUT_SECONDS, connect=Config.AI_CONNECT_TIMEOUT),
    )


def _map_error(error: Exception) -> AiUnavailableError:
    if isinstance(error, RateLimitError):
        return AiUnavailableError(
            AiFailureReason.RATE_LIMITED,
            "Rate limit exceeded. Please try again in a moment.",
        )
    if isinstance(error, APIStatusError) and error.status_code == 402:
        return AiUnavailableError(
            AiFailureReason.QUOTA_EXHAUSTED, "AI credits exhausted."
        )
    if isinstance(error, APITimeoutError):
        return AiUnavailableError(AiFailureReason.TIMEOUT, "AI response timed out")
    if isinstance(error, APIStatusError):
        return AiUnavailableError(
            AiFailureReason.UPSTREAM_ERROR, f"AI gateway error: {error.status_code}"
        )
    return AiUnavailableError(AiFailureReason.UPSTREAM_ERROR, "AI gateway unreachable")


@traceable(run_type="llm", name="chat_completion")
async def chat_completion(
    client: AsyncOpenAI,
    messages: list[dict],
    model: str,
    operation: str,
    **kwargs: Any,
) -> Any:
    """
    Chat completion with provider errors mapped to AiUnavailableError.

    Args:
        client: AsyncOpenAI client instance
        messages: List of message dicts [{"role": "user", "content": "..."}]
        model: Model name (e.g., "google/gemini-2.5-flash")
        operation: Label used for latency metrics and logs
        **kwargs: Passed through to chat.completions.create (tools, tool_choice)
    """
    started = time.monotonic()
    try:
        response = await client.chat.completions.create(
            model=model, messages=messages, **kwargs
        )
    except (APIStatusError, APIConnectionError) as e:
        mapped = _map_error(e)
        logger.error(f"[AI] {operation} failed: {type(e).__name__}: {e}")
        raise mapped from e
    finally:
        observe_ai_latency(operation, time.monotonic() - started)

    if response.usage:
        observe_ai_tokens("input", model, response.usage.prompt_tokens)
        observe_ai_tokens("output", model, response.usage.completion_tokens)
    return response


def _first_message(response: Any, operation: str) -> Any:
    if not getattr(response, "choices", None):
        raise AiUnavailableError(
            AiFailureReason.MALFORMED_RESPONSE, f"AI returned no choices for {operation}"
        )
    return response.choices[0].message


def _text_content(response: Any, operation: str) -> str:
    content = (_first_message(response, operation).content or "").strip()
    if not content:
        raise AiUnavailableError(
            AiFailureReason.MALFORMED_RESPONSE, f"AI returned empty content for {operation}"
        )
    return content


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _optional_price(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and value >= 0:
        return float(value)
    return None


def parse_extracted_product(arguments: str) -> ExtractedProduct:
    """Decode the forced tool call's arguments; `name` is mandatory."""
    try:
        data = json.loads(arguments)
    except (TypeError, ValueError) as e:
        raise AiUnavailableError(
            AiFailureReason.MALFORMED_RESPONSE, "AI returned invalid product data"
        ) from e
    if not isinstance(data, dict):
        raise AiUnavailableError(
            AiFailureReason.MALFORMED_RESPONSE, "AI returned invalid product data"
        )
    name = _optional_str(data.get("name"))
    if not name:
        raise AiUnavailableError(
            AiFailureReason.MALFORMED_RESPONSE, "No product data extracted"
        )
    return ExtractedProduct(
        name=name,
        price=_optional_price(data.get("price")),
        currency=_optional_str(data.get("currency")),
        image_url=_optional_str(data.get("image_url")),
        retailer=_optional_str(data.get("retailer")),
    )


class OpenAiAssistant(AiAssistant):
    def __init__(self, client: AsyncOpenAI, model: str = Config.AI_MODEL):
        self._client = client
        self._model = model

    async def reply(self, transcript: list[dict[str, str]]) -> ChatReply:
        logger.info(f"[AI] Chat completion with {len(transcript)} turns")
        response = await chat_completion(
            self._client,
            ChatPrompts.with_system(transcript),
            self._model,
            operation="chat",
        )
        content = _text_content(response, "chat")
        logger.info(f"[AI] Chat response received, length: {len(content)}")
        return ChatReply(content=content, metadata={})

    async def extract_product(self, url: str) -> ExtractedProduct:
        logger.info(f"[AI] Extracting product from: {url}")
        response = await chat_completion(
            self._client,
            [
                {"role": "system", "content": ProductPrompts.EXTRACT_SYSTEM},
                {"role": "user", "content": ProductPrompts.extract_user(url)},
            ],
            self._model,
            operation="extract_product",
            tools=[ProductPrompts.EXTRACT_TOOL],
            tool_choice={
                "type": "function",
                "function": {"name": ProductPrompts.EXTRACT_TOOL_NAME},
            },
        )
        tool_calls = _first_message(response, "extract_product").tool_calls or []
        if not tool_calls:
            raise AiUnavailableError(
                AiFailureReason.MALFORMED_RESPONSE, "No product data extracted"
            )
        return parse_extracted_product(tool_calls[0].function.arguments)

    async def product_note(self, name: str, price: Optional[float] = None) -> str:
        response = await chat_completion(
            self._client,
            [
                {"role": "system", "content": ProductPrompts.NOTE_SYSTEM},
                {"role": "user", "content": ProductPrompts.note_user(name, price)},
            ],
            self._model,
            operation="product_note",
        )
        return _text_content(response, "product_note")

    async def board_insight(self, products: list[ProductSummary]) -> str:
        response = await chat_completion(
            self._client,
            [
                {"role": "system", "content": ProductPrompts.INSIGHT_SYSTEM},
                {
                    "role": "user",
                    "content": ProductPrompts.insight_user(
                        [(p.name, p.price) for p in products]
                    ),
                },
            ],
            self._model,
            operation="board_insight",
        )
        return _text_content(response, "board_insight")
