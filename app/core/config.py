"""Centralized application configuration."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APP_", env_file=".env", extra="ignore"
    )

    # Authentication (APP_API_KEYS takes a JSON list)
    api_keys: list[str] = Field(default_factory=list)
    api_key_header: str = "X-API-Key"

    # HTTP logging
    enable_request_body_logging: bool = False
    enable_response_body_logging: bool = False
    max_response_body_length: int = Field(default=1000, gt=0)

    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
