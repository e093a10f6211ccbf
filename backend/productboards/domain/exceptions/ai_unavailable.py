"""
AiUnavailableError - The AI completion collaborator could not produce a result.
Maps to: HTTP 429 (rate limited), 402 (quota exhausted), 503 (everything else)
"""

from enum import Enum


class AiFailureReason(str, Enum):
    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    UPSTREAM_ERROR = "upstream_error"


class AiUnavailableError(Exception):
    """Raised for rate limits, exhausted quota, timeouts and unusable AI output."""

    def __init__(
        self,
        reason: AiFailureReason = AiFailureReason.UPSTREAM_ERROR,
        message: str = "AI service unavailable",
    ):
        super().__init__(message)
        self.reason = reason
        self.message = message
