"""Exceptions raised by the publishing pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postsmith.publishing.models import PublishStage


class PublishError(RuntimeError):
    """Base class for every failure surfaced by the publishing pipeline.

    ``stage`` is filled in by :meth:`PublishService.publish_post` with the
    last stage that completed before the failure.
    """

    stage: "PublishStage | None" = None


class InvalidArgumentError(PublishError, ValueError):
    """Raised before any I/O when a required argument is missing or blank."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"'{argument}' must not be null or blank")


class PublishFailedError(PublishError):
    """Raised when storage reports that an artefact could not be written."""


class TransportError(PublishError):
    """Raised when the outbound rendering call cannot be completed."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class PublishCancelledError(PublishError):
    """Raised when a publish deadline expires or is cancelled between stages."""


__all__ = [
    "InvalidArgumentError",
    "PublishCancelledError",
    "PublishError",
    "PublishFailedError",
    "TransportError",
]
