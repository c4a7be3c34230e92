"""Configuration module using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRUTHY_VALUES = ("true", "1", "yes")


class Settings(BaseSettings):
    """Integration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Streaming mode
    lexia_dev_mode: bool = False

    # Centrifugo relay defaults (overridable per request)
    centrifugo_url: str | None = None
    centrifugo_api_key: str | None = None

    # HTTP Client
    http_timeout_connect: float = 10.0
    http_timeout_read: float = 30.0

    # Logging
    log_level: str = "INFO"

    @field_validator("lexia_dev_mode", mode="before")
    @classmethod
    def parse_dev_mode(cls, v: Any) -> bool:
        """Only "true", "1" and "yes" (any case) switch dev mode on."""
        if v is None:
            return False
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in TRUTHY_VALUES


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging with the package's standard format."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Convenience instance for quick access
settings = get_settings()
