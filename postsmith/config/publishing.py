"""Publishing configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from postsmith.config.base import BaseConfig

DEFAULT_RENDER_ENDPOINT = "/admin/post/publish/html"


class PublishingConfig(BaseConfig):
    """Where published artefacts live and how the rendering endpoint is reached."""

    markdown_path: str = Field(
        "App_Data/posts/markdown",
        description="Logical directory (relative to the application root) for Markdown sources",
        min_length=1,
    )
    html_path: str = Field(
        "App_Data/posts/html",
        description="Logical directory (relative to the application root) for rendered posts",
        min_length=1,
    )
    theme: str = Field("default", description="Theme used when rendering published posts", min_length=1)
    render_endpoint: str = Field(
        DEFAULT_RENDER_ENDPOINT,
        description="Path of the rendering endpoint on the inbound host",
    )
    render_timeout: float = Field(30.0, gt=0, description="Timeout in seconds for the rendering call")
    themes_dir: Path | None = Field(
        None,
        description="Optional directory holding <theme>.html Jinja2 templates",
    )

    @field_validator("markdown_path", "html_path")
    @classmethod
    def _normalise_logical_root(cls, value: str) -> str:
        cleaned = value.strip().replace("\\", "/").strip("/")
        if not cleaned:
            raise ValueError("Logical directory must not be empty")
        if Path(value.strip()).is_absolute() or value.strip().startswith("/"):
            raise ValueError(f"Logical directory must be relative to the application root: {value!r}")
        if ".." in cleaned.split("/"):
            raise ValueError(f"Logical directory must not escape the application root: {value!r}")
        return cleaned

    @field_validator("render_endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("render_endpoint must be an absolute path starting with '/'")
        return value


__all__ = ["DEFAULT_RENDER_ENDPOINT", "PublishingConfig"]
