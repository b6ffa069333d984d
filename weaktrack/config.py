"""Tracker configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_OBJECT_NAME = "weakref:type=WeakReference"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    enabled: bool = Field(default=True, alias="WEAKTRACK_ENABLED")
    stackdump_interval: int = Field(default=100, alias="WEAKTRACK_STACKDUMP_INTERVAL")
    registration_delay_seconds: float = Field(
        default=1.0, ge=0, alias="WEAKTRACK_REGISTRATION_DELAY_SECONDS"
    )
    object_name: str = Field(default=DEFAULT_OBJECT_NAME, min_length=1, alias="WEAKTRACK_OBJECT_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("stackdump_interval")
    @classmethod
    def clamp_stackdump_interval(cls, value: int) -> int:
        return value if value > 0 else 1

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
