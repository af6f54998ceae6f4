"""Health check endpoints.

Liveness is stateless; readiness pings the database.
"""

from fastapi import APIRouter, Response, status

from catalog import __version__
from catalog.config import settings
from catalog.infra.database import verify_db_connection
from catalog.infra.logging import get_logger
from catalog.schemas.common import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check.

    Returns 200 if the service is running.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(response: Response) -> HealthResponse:
    """Readiness check.

    Verifies the database answers ``SELECT 1``; responds 503 otherwise.
    """
    checks: dict[str, bool] = {"database": await verify_db_connection()}

    all_healthy = all(checks.values())
    if not all_healthy:
        logger.warning("Readiness check failed", checks=checks)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
