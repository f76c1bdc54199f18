"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings

    print(settings.DATABASE_URL)
    print(settings.SEARCH_MAX_RESULTS)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """

    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./verblab.db",
        description="SQLite connection string for the verb store"
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )
    STORAGE_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Maximum seconds a single storage operation may take"
    )
    SEED_DATA_PATH: Optional[str] = Field(
        default=None,
        description="Override path for the initial verb data (JSON)"
    )

    # ==========================================================================
    # Search Configuration
    # ==========================================================================
    SEARCH_MAX_RESULTS: int = Field(
        default=50,
        gt=0,
        description="Maximum number of partial matches returned by a search"
    )
    SEARCH_DEBOUNCE_MS: int = Field(
        default=300,
        ge=0,
        description="Delay before a typed query is sent to the store"
    )

    # ==========================================================================
    # User Preferences
    # ==========================================================================
    DEFAULT_DIALECT: str = Field(
        default="en-US",
        description="Dialect used when no preference has been stored"
    )

    # ==========================================================================
    # Redis Configuration (for rate limiting)
    # ==========================================================================
    REDIS_URL: Optional[str] = Field(
        default=None,
        description="Redis connection URL for rate limiting"
    )

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def search_debounce_seconds(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    APP_NAME: str = Field(
        default="VerbLab",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    LOG_LEVEL: Optional[str] = Field(
        default=None,
        description="Root log level; DEBUG when unset and DEBUG is on, else INFO"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Write logs as JSON lines instead of coloured text"
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()
