"""Catalog API settings.

Everything comes from environment variables (or a local ``.env``); field
names are the variable names, case-insensitive. ``DB_PASSWORD`` has no
usable default and must be provided outside local development.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo)",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # =========================================================================
    # Database
    # =========================================================================
    db_user: str = Field(
        default="catalog_app",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="catalog",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )
    db_pool_recycle_seconds: int = Field(
        default=1800,
        description="Recycle pooled connections older than this",
    )
    database_url_override: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL, takes precedence over db_* fields",
    )
    create_tables_on_startup: bool = Field(
        default=False,
        description="Run metadata.create_all() during startup (local development only)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the asyncpg database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Catalog
    # =========================================================================
    low_stock_threshold: int = Field(
        default=10,
        ge=0,
        description="Default threshold for the low-stock listing",
    )
    default_page_size: int = Field(
        default=20,
        ge=1,
        description="Default page size for product listings",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Upper bound for the requested page size",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
