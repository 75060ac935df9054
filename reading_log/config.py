"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Every setting can be overridden by an environment variable of the same
name (case-insensitive) or by a line in a local .env file.

PATTERN: Settings Singleton
===========================
A single Settings instance is cached using @lru_cache, so:
- Configuration is loaded once at startup
- All parts of the app use the same configuration
- The .env file is read only once

Usage:
    from reading_log.config import get_settings

    settings = get_settings()
    print(settings.app_name)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic Settings automatically:
    1. Reads from environment variables (case-insensitive)
    2. Falls back to .env file if env var not found
    3. Validates types and raises errors for invalid values
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Reading Log API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, SQL echo, auto-reload)"
    )
    api_version: str = Field(
        default="v1",
        description="API version for URL routing"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8001,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Catalog Store Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./reading_log.db",
        description="SQLAlchemy URL of the catalog store"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Provision the books table on startup if it is missing"
    )

    # -------------------------------------------------------------------------
    # Notification Settings
    # -------------------------------------------------------------------------
    # New books are announced on a Redis pub/sub channel. Delivery is
    # best-effort: if Redis is down the book is still created.
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for notifications and rate limiting"
    )
    notifications_enabled: bool = Field(
        default=True,
        description="Publish a book.created event after each ingestion"
    )
    notification_channel: str = Field(
        default="reading_log_events",
        description="Redis pub/sub channel for book events"
    )

    # -------------------------------------------------------------------------
    # Rate Limiting Settings
    # -------------------------------------------------------------------------
    rate_limit_enabled: bool = Field(
        default=False,
        description="Enable slowapi rate limiting (requires Redis)"
    )
    rate_limit_default: str = Field(
        default="100/minute",
        description="Limit for single-record reads and counts"
    )
    rate_limit_search: str = Field(
        default="60/minute",
        description="Limit for search endpoints"
    )
    rate_limit_write: str = Field(
        default="30/minute",
        description="Limit for book creation"
    )

    # -------------------------------------------------------------------------
    # Backup Settings
    # -------------------------------------------------------------------------
    backup_dir: str = Field(
        default="./backups",
        description="Directory where catalog backups are written"
    )

    # -------------------------------------------------------------------------
    # HTTP Settings
    # -------------------------------------------------------------------------
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        """SQLite engines take no pool sizing arguments."""
        return self.database_url.startswith("sqlite")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Returns:
            The validated value (uppercase)

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call creates the Settings instance, loads .env and validates
    it; subsequent calls return the cached instance. Tests that change
    environment variables call get_settings.cache_clear() first.

    Returns:
        Cached Settings instance
    """
    return Settings()
