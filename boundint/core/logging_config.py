"""
Structured Logging Configuration Module

JSON-formatted (or plain text) logging for the boundint package logger.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from boundint.core.config import get_settings

PACKAGE_LOGGER = "boundint"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
            "operation": getattr(record, "operation", None),
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Setup logging for the boundint package.

    Arguments left as None are taken from BoundIntSettings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" or "text"
        log_file: Path of a log file; stderr if not set

    Returns:
        Configured package logger
    """
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    log_file = log_file or settings.log_file

    logger = logging.getLogger(PACKAGE_LOGGER)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    elif fmt == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        raise ValueError(f"log format must be 'json' or 'text', got {fmt!r}")

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
