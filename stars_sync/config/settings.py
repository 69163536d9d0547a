"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for stars-sync.

    All settings can be overridden via environment variables.
    Prefix is not used so the standard names (GITHUB_TOKEN, NOTION_TOKEN,
    NOTION_DATABASE_ID) are picked up as-is.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_format: Literal["console", "json"] = "console"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Credentials and target database
    github_token: str | None = None
    notion_token: str | None = None
    notion_database_id: str | None = None

    # API endpoints
    github_api_url: str = "https://api.github.com"
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"

    # HTTP transport
    http_timeout_seconds: float = Field(default=30.0, gt=0.0, le=300.0)
    max_http_retries: int = Field(default=3, ge=0, le=10)
    max_backoff_seconds: float = Field(default=60.0, ge=1.0, le=300.0)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
