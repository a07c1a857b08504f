"""Loguru sink configuration."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> list[int]:
    """Replace the default sink with stderr at ``level``.

    When ``log_file`` is given, JSON records are also written to a rotating
    file. Returns the ids of the sinks that were added.
    """

    logger.remove()
    sink_ids = [logger.add(sys.stderr, level=level)]

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            sink_ids.append(
                logger.add(
                    log_file,
                    rotation="5 MB",
                    retention=5,
                    enqueue=True,
                    serialize=True,
                    level=level,
                )
            )
        except OSError as exc:
            logger.warning("Failed to initialise file log sink {}: {}", log_file, exc)

    return sink_ids


__all__ = ["configure_logging"]
