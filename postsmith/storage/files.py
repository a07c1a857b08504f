"""Whole-file text storage for published artefacts."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from postsmith.errors import InvalidArgumentError

PathLike = str | os.PathLike[str]


class WriteStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of :meth:`FileStore.write`.

    Truthy only when the content was written, so callers that only care
    about success can keep treating it as a boolean.
    """

    status: WriteStatus
    path: Path | None = None
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.status is WriteStatus.WRITTEN

    @classmethod
    def written(cls, path: Path) -> "WriteResult":
        return cls(WriteStatus.WRITTEN, path)

    @classmethod
    def skipped(cls, path: Path, reason: str) -> "WriteResult":
        return cls(WriteStatus.SKIPPED, path, reason)

    @classmethod
    def failed(cls, path: Path, reason: str) -> "WriteResult":
        return cls(WriteStatus.FAILED, path, reason)


@dataclass(frozen=True, slots=True)
class ApplicationEnvironment:
    """Root-path context of the running application."""

    application_root: Path

    @classmethod
    def from_path(cls, root: PathLike) -> "ApplicationEnvironment":
        return cls(application_root=Path(root).expanduser().resolve())


class FileStore:
    """Read and write UTF-8 text files as whole units.

    Writes go through a temporary sibling file that is renamed over the
    target, so readers never observe a partially written file. There is
    no locking between writers: concurrent writes to the same path race
    and the last one to finish wins.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def read(self, path: PathLike | None) -> str | None:
        """Return the file content, or ``None`` when there is nothing to read.

        A missing file or a directory yields ``None``. Content that does not
        decode with the store's encoding raises :class:`UnicodeDecodeError`.
        """
        if _is_blank(path):
            return None
        target = Path(path)  # type: ignore[arg-type]
        try:
            with target.open("r", encoding=self._encoding, newline="") as fp:
                return fp.read()
        except (FileNotFoundError, IsADirectoryError):
            logger.debug("Nothing to read at {}", target)
            return None

    def write(self, path: PathLike | None, content: str | None) -> WriteResult:
        """Overwrite ``path`` with ``content``, creating parent directories.

        Empty content is skipped rather than treated as an error. A missing
        path is a caller bug and raises :class:`InvalidArgumentError`.
        """
        if _is_blank(path):
            raise InvalidArgumentError("path")
        target = Path(path)  # type: ignore[arg-type]

        if not content:
            logger.debug("Skipped writing empty content to {}", target)
            return WriteResult.skipped(target, "content is empty")

        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self._encoding,
                newline="",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as fp:
                tmp_name = fp.name
                fp.write(content)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.warning("Failed to write {}: {}", target, exc)
            return WriteResult.failed(target, str(exc))

        logger.debug("Wrote {} characters to {}", len(content), target)
        return WriteResult.written(target)

    def resolve_directory(self, env: ApplicationEnvironment | None, logical_key: str | None) -> Path:
        """Map a logical directory key onto the application root.

        The directory is not created here; :meth:`write` creates it on demand.
        """
        if env is None:
            raise InvalidArgumentError("env")
        if _is_blank(logical_key):
            raise InvalidArgumentError("logical_key")

        parts = [part for part in str(logical_key).replace("\\", "/").split("/") if part]
        return Path(env.application_root).joinpath(*parts)


def _is_blank(value: PathLike | None) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


__all__ = [
    "ApplicationEnvironment",
    "FileStore",
    "WriteResult",
    "WriteStatus",
]
