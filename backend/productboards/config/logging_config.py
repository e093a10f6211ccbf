import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from contextvars import ContextVar
from productboards.config.settings import Config

NO_CORRELATION_ID = "NO Correlation ID"

# Context variable to store correlation ID across async task boundaries
correlation_id_var: ContextVar[str] = ContextVar(
    "correlation_id", default=NO_CORRELATION_ID
)


class CorrelationIdFilter(logging.Filter):
    """Logging filter to add correlation ID to log records."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures correlation_id always exists."""

    def format(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = NO_CORRELATION_ID
        return super().format(record)


def setup_logging(level: str = "INFO", log_file: str | None = None):
    root = logging.getLogger()
    root.setLevel(logging.WARNING)  # Third-party loggers stay at WARNING
    formatter = SafeFormatter(Config.LOG_FORMAT)

    # Re-running setup replaces our handlers instead of stacking them
    for handler in list(root.handlers):
        if getattr(handler, "_productboards", False):
            root.removeHandler(handler)
            handler.close()

    logger_handler = logging.StreamHandler(sys.stdout)
    logger_handler.setFormatter(formatter)
    logger_handler.addFilter(CorrelationIdFilter())
    logger_handler._productboards = True
    root.addHandler(logger_handler)

    # File logging with rotation
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationIdFilter())
        file_handler._productboards = True
        root.addHandler(file_handler)

    logging.getLogger("productboards").setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )
    logging.getLogger(__name__).info("Logging is set up.")

    return root
