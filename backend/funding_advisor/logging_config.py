"""Structured logging configuration using structlog.

JSON output for log aggregation in production, coloured console output in
development. Stdlib loggers (``logging.getLogger``) used by services and
engines go through the same handlers.

Usage::

    from funding_advisor.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("manual_update_applied", company_id=7, changes=2)
    # Output: {"event": "manual_update_applied", "company_id": 7, "changes": 2, "timestamp": "...", ...}
"""

import logging
import sys
from typing import Any, Optional

import structlog

from funding_advisor.config import Settings

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "anthropic")


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        json_logs: If True, output JSON format. If False, use human-readable format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """Configure logging from ``JSON_LOGS`` / ``LOG_LEVEL`` settings."""
    settings = settings or Settings()
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the module.

    Returns:
        Structured logger instance with bound context.
    """
    return structlog.get_logger(name)
