"""Application settings for the room registry runtime and tests."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    roomhub_app_env: str = "dev"
    roomhub_default_max_players: int = Field(default=8, ge=1)
    roomhub_log_level: str = "INFO"

    @field_validator("roomhub_log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only level names known to the logging module."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"ROOMHUB_LOG_LEVEL={value!r} is not a logging level name")
        return level


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
