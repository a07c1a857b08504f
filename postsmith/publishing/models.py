"""Data models used by the publishing pipeline."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from postsmith.errors import InvalidArgumentError, PublishCancelledError


class PublishedContent(BaseModel):
    """Payload posted to the rendering endpoint."""

    model_config = ConfigDict(frozen=True)

    theme: str
    markdown: str
    html: str = ""


@dataclass(frozen=True, slots=True)
class PublishedPostPath:
    """Virtual paths of the artefacts written by a single publish call."""

    markdown: str
    html: str

    def to_dict(self) -> dict[str, str]:
        return {"markdown": self.markdown, "html": self.html}


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Scheme and host the inbound caller connected with."""

    scheme: str
    host: str

    def __post_init__(self) -> None:
        if self.scheme not in {"http", "https"}:
            raise InvalidArgumentError("scheme", f"Unsupported scheme for rendering call: {self.scheme!r}")
        if not self.host or not self.host.strip():
            raise InvalidArgumentError("host")

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"

    @classmethod
    def from_url(cls, url: str) -> "RequestContext":
        parts = urlsplit(url)
        return cls(scheme=parts.scheme.lower(), host=parts.netloc)


class PublishStage(str, Enum):
    START = "start"
    MARKDOWN_PUBLISHED = "markdown_published"
    HTML_RENDERED = "html_rendered"
    COMPLETE = "complete"
    FAILED = "failed"


class Deadline:
    """Cancellation and timeout signal threaded through a publish call.

    ``timeout`` is in seconds; ``None`` means the deadline only fires when
    :meth:`cancel` is called. Safe to cancel from another thread.
    """

    def __init__(self, timeout: float | None = None, *, clock: Callable[[], float] = time.monotonic) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be non-negative")
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, step: str) -> None:
        """Raise :class:`PublishCancelledError` if the call must stop before ``step``."""
        if self.cancelled:
            raise PublishCancelledError(f"Publish cancelled before {step}")
        if self.expired:
            raise PublishCancelledError(f"Publish deadline expired before {step}")


__all__ = [
    "Deadline",
    "PublishStage",
    "PublishedContent",
    "PublishedPostPath",
    "RequestContext",
]
