"""Application-level configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from postsmith.config.base import BaseConfig
from postsmith.config.publishing import PublishingConfig
from postsmith.config.web import WebConfig

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class AppConfig(BaseConfig):
    """Top-level runtime configuration for the entire application."""

    app_root: Path = Field(Path("."), description="Application root that logical directories resolve against")
    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    log_file: Path | None = Field(None, description="Optional rotating JSON log file")
    publishing: PublishingConfig = Field(default_factory=PublishingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    @field_validator("logging_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown logging level: {value!r}")
        return level


__all__ = ["AppConfig"]
