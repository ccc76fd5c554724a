"""Configuration settings for the running intelligence CLI."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables (prefix ``RUNINTEL_``) or a
    local ``.env`` file.

    Only the CLI reads these; the analytics take everything as arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="RUNINTEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    json_indent: int = 2
    default_runs_file: Optional[Path] = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
