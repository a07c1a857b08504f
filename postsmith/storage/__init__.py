"""Filesystem storage for published posts."""

from __future__ import annotations

from .files import ApplicationEnvironment, FileStore, WriteResult, WriteStatus

__all__ = ["ApplicationEnvironment", "FileStore", "WriteResult", "WriteStatus"]
