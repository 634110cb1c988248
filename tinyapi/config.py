from __future__ import annotations

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logger.bind(module="config")


class Settings(BaseSettings):
    """Client configuration loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="TINYAPI_LOG_LEVEL")

    http_timeout_seconds: float | None = Field(default=None, alias="TINYAPI_HTTP_TIMEOUT_SECONDS")
    http_follow_redirects: bool = Field(default=True, alias="TINYAPI_HTTP_FOLLOW_REDIRECTS")
    http_user_agent: str | None = Field(default=None, alias="TINYAPI_HTTP_USER_AGENT")

    mock_resource_dir: str = Field(default="mocks", alias="TINYAPI_MOCK_RESOURCE_DIR")
    mock_delay_seconds: float = Field(default=0.5, ge=0.0, alias="TINYAPI_MOCK_DELAY_SECONDS")

    def export_safe(self) -> dict[str, Any]:
        """Return settings suitable for debugging/logging."""
        return {
            "log_level": self.log_level,
            "http_timeout_seconds": self.http_timeout_seconds,
            "http_follow_redirects": self.http_follow_redirects,
            "http_user_agent": self.http_user_agent,
            "mock_resource_dir": self.mock_resource_dir,
            "mock_delay_seconds": self.mock_delay_seconds,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache client settings."""
    settings = Settings()
    log.info("Settings initialised: {}", settings.export_safe())
    return settings
