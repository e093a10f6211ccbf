"""Timeout-bounded calls to the AI assistant."""

import asyncio
import logging
from typing import Awaitable, TypeVar

from productboards.domain.exceptions import AiFailureReason, AiUnavailableError
from productboards.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_ai(call: Awaitable[T], timeout: float, operation: str) -> T:
    """Await an assistant call; a timeout is reported as AiUnavailableError."""
    try:
        return await asyncio.wait_for(call, timeout)
    except asyncio.TimeoutError as e:
        increment_error(MetricsErrorType.AI_TIMEOUT)
        logger.warning(f"AI call '{operation}' timed out after {timeout}s")
        raise AiUnavailableError(
            AiFailureReason.TIMEOUT, "AI response timed out"
        ) from e
    except AiUnavailableError as e:
        increment_error(MetricsErrorType.AI_UNAVAILABLE)
        logger.warning(f"AI call '{operation}' failed: {e.reason.value}")
        raise
