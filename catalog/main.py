"""FastAPI application entry point.

Catalog API: products and hierarchical product categories over PostgreSQL.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog import __version__
from catalog.api.errors import register_exception_handlers
from catalog.config import settings
from catalog.infra.database import close_db_engine, create_tables, verify_db_connection
from catalog.infra.logging import get_logger, setup_logging

# Import routers
from catalog.api.routes.categories import router as categories_router
from catalog.api.routes.health import router as health_router
from catalog.api.routes.products import router as products_router

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Optionally create missing tables (local development)
    - Verify database connection

    Shutdown:
    - Dispose the connection pool
    """
    logger.info(
        "Catalog API starting",
        environment=settings.environment,
        version=__version__,
    )

    if settings.create_tables_on_startup:
        await create_tables()

    db_ok = await verify_db_connection()
    if not db_ok:
        logger.warning("Database connection failed - will retry on first request")

    yield

    # Shutdown
    logger.info("Catalog API shutting down")
    await close_db_engine()
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="Catalog API",
    description="Products and hierarchical product categories",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "prod" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with method, path, status and duration."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)

    start = time.perf_counter()
    logger.debug("Incoming request", query=str(request.url.query) or None)

    # Unhandled errors are answered with 500 by ServerErrorMiddleware
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "Request completed",
            status_code=status_code,
            duration_ms=duration_ms,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

register_exception_handlers(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(categories_router, prefix="/product-categories", tags=["Product Categories"])
app.include_router(products_router, prefix="/products", tags=["Products"])


# =============================================================================
# Root Endpoint
# =============================================================================


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Catalog API",
        "version": __version__,
        "environment": settings.environment,
    }
