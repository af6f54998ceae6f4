"""Async PostgreSQL access for the catalog.

One engine per process, created on first use and disposed by the app
lifespan. Request handlers get a session through :func:`get_db_session`,
which commits the unit of work or rolls it back.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog.config import settings
from catalog.infra.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


def _init_engine() -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_pre_ping=True,
        pool_recycle=settings.db_pool_recycle_seconds,
        echo=settings.debug,
    )
    # Rows are read again after commit to build responses
    sessions = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

    logger.info(
        "Database engine created",
        host=settings.db_host,
        database=settings.db_name,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
    )
    return engine, sessions


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first call."""
    global _engine, _sessions
    if _engine is None:
        _engine, _sessions = _init_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert _sessions is not None
    return _sessions


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session for one unit of work.

    Commits when the block exits cleanly. Any exception rolls the session
    back and propagates unchanged.

    Example:
        async with get_db_session() as session:
            categories = CategoryRepository(session)
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.warning("Unit of work rolled back", error_type=type(e).__name__, error=str(e))
            raise


async def create_tables() -> None:
    """Create missing tables from the ORM metadata (local development only)."""
    from catalog.models import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", tables=sorted(Base.metadata.tables))


async def close_db_engine() -> None:
    """Dispose pooled connections; the next call to get_engine() starts over."""
    global _engine, _sessions
    if _engine is None:
        return

    await _engine.dispose()
    _engine = None
    _sessions = None
    logger.info("Database engine disposed")


async def verify_db_connection() -> bool:
    """Ping the database with ``SELECT 1``.

    Returns:
        True if the database answered, False on any connection error
    """
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database ping failed", error_type=type(e).__name__, error=str(e))
        return False

    logger.debug("Database ping succeeded")
    return True
