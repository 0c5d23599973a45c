"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    price_service_url: str
    price_service_api_key: str
    price_service_timeout_seconds: float = 15.0
    cache_max_age_seconds: float = 60.0
    retry_attempts: int = 0
    retry_delay_seconds: float = 0.3
    warm_item_codes: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_item_codes(raw: str | None) -> list[str]:
    """Parse a comma separated list of item codes, keeping order."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
