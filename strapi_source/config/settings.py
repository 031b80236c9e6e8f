"""
Connector Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Every variable is read with the ``STRAPI_`` prefix, e.g. ``STRAPI_API_URL``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connector settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STRAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Strapi API
    # -------------------------------------------------------------------------
    api_url: str = Field(..., description="Base URL of the Strapi instance")
    query_limit: int = Field(
        default=100,
        gt=0,
        description="Value sent as _limit on every collection request",
    )
    jwt_token: SecretStr | None = Field(
        default=None, description="Bearer token sent as Authorization header"
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds for API and media requests",
    )

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------
    content_types: list[str] = Field(
        default_factory=list,
        description="Endpoints to fetch; each is also the rich-text path root",
    )

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------
    media_dir: Path = Field(
        default=Path(".cache/strapi-media"),
        description="Directory downloaded media files are written to",
    )
    htaccess_user: str | None = Field(
        default=None, description="Basic auth user for protected media URLs"
    )
    htaccess_pass: SecretStr | None = Field(
        default=None, description="Basic auth password for protected media URLs"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Endpoints are joined with a single '/'."""
        return value.rstrip("/")

    @property
    def media_auth(self) -> tuple[str, str] | None:
        """Basic auth pair for media downloads, if configured."""
        if self.htaccess_user and self.htaccess_pass:
            return (self.htaccess_user, self.htaccess_pass.get_secret_value())
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
