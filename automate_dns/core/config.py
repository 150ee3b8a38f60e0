"""Application configuration via Pydantic BaseSettings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_log = logging.getLogger(__name__)

_ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./automate_dns.db",
        description="Async SQLAlchemy connection URL (aiosqlite or asyncpg)",
    )
    auto_create_schema: bool = Field(
        default=True,
        description="Create missing tables at startup (disable when using Alembic)",
    )

    # Application
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000)
    app_debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    # Cloudflare DNS sync, disabled while token or zone is empty
    cloudflare_api_token: str = Field(default="")
    cloudflare_zone_id: str = Field(default="")
    cloudflare_api_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Base URL of the Cloudflare v4 REST API",
    )
    dns_sync_timeout: float | None = Field(
        default=None,
        description="Timeout in seconds for Cloudflare calls (None = wait indefinitely)",
    )

    @computed_field
    @property
    def sync_database_url(self) -> str:
        """Synchronous DB URL (for Alembic migrations)."""
        url = self.database_url
        for driver in _ASYNC_DRIVERS:
            url = url.replace(driver, "")
        return url

    @computed_field
    @property
    def dns_sync_enabled(self) -> bool:
        return bool(self.cloudflare_api_token and self.cloudflare_zone_id)

    @model_validator(mode="after")
    def _warn_partial_dns_config(self) -> "Settings":
        """Warn when only one of the two Cloudflare credentials is set."""
        if bool(self.cloudflare_api_token) != bool(self.cloudflare_zone_id):
            _log.warning(
                "Only one of CLOUDFLARE_API_TOKEN / CLOUDFLARE_ZONE_ID is set; DNS sync stays disabled"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
