"""
Structured logging configuration.

Emits one JSON object per line so the output can be shipped
to any log collector without extra parsing rules.
"""

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "account_ledger"

# Attributes passed through ``extra=`` that end up in the JSON body
EXTRA_FIELDS = ("action", "customer_id", "amount", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: ``json`` for structured output, anything else for plain text

    Returns:
        The configured ``account_ledger`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers to avoid duplicates on re-configuration
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
