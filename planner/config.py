"""Planner settings read from PLANNER_* environment variables or .env."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for logging and snapshot loading.

    app_name and app_version are bound into every log line by
    configure_logging().
    """

    # Logging
    app_name: str = "Event Planner"
    app_version: str = "0.1.0"
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    # Scheduling
    default_timezone: str = Field(
        default="UTC",
        description="IANA zone applied to stored proposals that carry no timezone",
    )

    model_config = {
        "env_prefix": "PLANNER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()
