"""Structured logging setup using structlog."""

import logging
import sys

import structlog
from structlog.types import Processor

from core.config import Settings


def setup_logging(
    settings: Settings, level: str | None = None, json_logs: bool | None = None
) -> None:
    """Configure structlog and route stdlib logging through the same level.

    JSON lines in production, colored console output everywhere else.
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if json_logs is None:
        json_logs = settings.is_production

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Processor
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    # Uvicorn access lines duplicate RequestLoggingMiddleware output
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
