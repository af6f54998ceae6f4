"""Common schemas for API responses."""

from datetime import datetime
from typing import Any

from pydantic import Field

from catalog.schemas.base import CamelModel


class ErrorResponse(CamelModel):
    """Standard error response body."""

    status_code: int = Field(description="HTTP status code")
    timestamp: datetime = Field(description="When the error was produced (UTC)")
    path: str = Field(description="Request path")
    method: str = Field(description="Request method")
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable message, not contractually stable")
    details: dict[str, Any] | None = Field(default=None, description="Additional error details")


class HealthResponse(CamelModel):
    """Health check response."""

    status: str = Field(description="Health status (healthy, degraded)")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual health checks")
