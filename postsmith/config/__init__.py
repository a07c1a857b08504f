"""Configuration namespace for postsmith."""

from __future__ import annotations

from .app import AppConfig
from .base import BaseConfig, load_config
from .publishing import DEFAULT_RENDER_ENDPOINT, PublishingConfig
from .utils import resolve_env_reference
from .web import WebAuthConfig, WebConfig

__all__ = [
    "AppConfig",
    "BaseConfig",
    "DEFAULT_RENDER_ENDPOINT",
    "PublishingConfig",
    "WebAuthConfig",
    "WebConfig",
    "load_config",
    "resolve_env_reference",
]
