"""Web adapter configuration models."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from postsmith.config.base import BaseConfig
from postsmith.config.utils import resolve_env_reference


class WebAuthConfig(BaseConfig):
    """Settings for protecting the admin preview and publish APIs."""

    enabled: bool = Field(
        False, description="Whether header token authentication is enforced.",
    )
    header_name: str = Field(
        "X-Admin-Token",
        description="Header to read the authentication token from.",
        min_length=1,
    )
    token: str | None = Field(
        default=None,
        description="Shared secret token required when enabled; accepts 'env:VAR_NAME'.",
        min_length=1,
    )

    @field_validator("token")
    @classmethod
    def _strip_token(cls, token: str | None) -> str | None:
        if token is None:
            return None
        stripped = token.strip()
        return stripped if stripped else None

    @model_validator(mode="after")
    def _ensure_token_when_enabled(self) -> "WebAuthConfig":
        if self.enabled and not self.token:
            msg = "Authentication token must be provided when web auth is enabled."
            raise ValueError(msg)
        return self

    @property
    def token_secret(self) -> str:
        """Return the token with any ``env:VAR`` reference expanded."""

        return resolve_env_reference(self.token) or ""


class WebConfig(BaseConfig):
    """Top-level settings for the FastAPI adapter."""

    title: str = Field("postsmith", description="Title reported by the API schema.", min_length=1)
    auth: WebAuthConfig | None = Field(
        default=None,
        description="Authentication settings for the admin APIs.",
    )


__all__ = ["WebAuthConfig", "WebConfig"]
