"""structlog setup for the catalog service.

Outside ``dev`` (and unless ``LOG_JSON=false``) every event is one JSON
line on stdout; in ``dev`` the coloured console renderer is used. Request
scoped fields (method, path) are bound through ``structlog.contextvars``
by the HTTP middleware and merged into every event.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from catalog.config import settings

_QUIET_LOGGERS = ("uvicorn.access", "httpx", "asyncpg")


def _renderer() -> list[Processor]:
    if settings.log_json and settings.environment != "dev":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=True)]


def setup_logging() -> None:
    """Configure structlog and route stdlib logging to stdout."""
    level = logging.getLevelName(settings.log_level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo is driven by DEBUG through the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Logger for ``name`` (usually ``__name__``) with optional bound fields."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_context) if initial_context else logger
