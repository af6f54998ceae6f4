"""Infrastructure - Database and logging."""

from catalog.infra.database import (
    close_db_engine,
    create_tables,
    get_db_session,
    verify_db_connection,
)
from catalog.infra.logging import get_logger, setup_logging

__all__ = [
    "close_db_engine",
    "create_tables",
    "get_db_session",
    "verify_db_connection",
    "get_logger",
    "setup_logging",
]
