"""
Application Configuration

All settings loaded from environment variables.
Read once at startup and treated as immutable for the process lifetime.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Indicators BFF"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["*"]

    # Upstream indicators service
    indicators_base_url: Optional[str] = None
    upstream_timeout_seconds: float = 8.0

    # Shared-secret check on the inbound endpoint
    bff_token: Optional[str] = None
    bff_allow_anonymous: bool = False  # must be set explicitly to run without a token

    # Request defaults
    default_count: int = 240

    @field_validator("indicators_base_url", "bff_token", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("indicators_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    @property
    def auth_enabled(self) -> bool:
        return self.bff_token is not None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
