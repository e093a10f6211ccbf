"""Translation of Prisma client errors into StoreError."""

import logging
from contextlib import contextmanager

from prisma.errors import PrismaError

from productboards.domain.exceptions import StoreError
from productboards.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    try:
        yield
    except PrismaError as e:
        increment_error(MetricsErrorType.STORE_FAILED)
        logger.error(f"[Store] {operation} failed: {e}")
        raise StoreError(f"Store unavailable: {operation} failed") from e
