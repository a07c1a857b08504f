"""Publishing pipeline package."""

from __future__ import annotations

from postsmith.errors import (
    InvalidArgumentError,
    PublishCancelledError,
    PublishError,
    PublishFailedError,
    TransportError,
)

from .models import Deadline, PublishedContent, PublishedPostPath, PublishStage, RequestContext
from .service import HTML_FILENAME, MARKDOWN_FILENAME, PublishService
from .transport import RenderRequestTransport

__all__ = [
    "Deadline",
    "HTML_FILENAME",
    "InvalidArgumentError",
    "MARKDOWN_FILENAME",
    "PublishCancelledError",
    "PublishError",
    "PublishFailedError",
    "PublishService",
    "PublishStage",
    "PublishedContent",
    "PublishedPostPath",
    "RenderRequestTransport",
    "RequestContext",
    "TransportError",
]
