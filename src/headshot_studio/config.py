"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash-image"
    gemini_timeout_ms: int = Field(default=300_000, ge=1)
    rembg_model: str = "u2net_human_seg"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, ge=1)
    session_ttl_seconds: int = Field(default=3600, ge=1)
    max_sessions: int = Field(default=500, ge=1)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_api_key(raw: str | None) -> str | None:
    """Normalize a configured API key, treating blank values as missing."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
