"""
DOMAIN EXCEPTIONS - Business rule violations and collaborator failures

These exceptions are raised by domain and application logic and caught by the
presentation layer, which maps them to HTTP status codes.
"""

from productboards.domain.exceptions.entity_not_found import EntityNotFoundError
from productboards.domain.exceptions.access_denied import AccessDeniedError
from productboards.domain.exceptions.validation_error import DomainValidationError
from productboards.domain.exceptions.store_error import StoreError
from productboards.domain.exceptions.ai_unavailable import (
    AiUnavailableError,
    AiFailureReason,
)

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "StoreError",
    "AiUnavailableError",
    "AiFailureReason",
]
