"""Rendering helpers for Markdown posts."""

from __future__ import annotations

from .markup import DEFAULT_EXTENSIONS, MarkdownRenderer
from .theme import ThemeRenderer, extract_title

__all__ = ["DEFAULT_EXTENSIONS", "MarkdownRenderer", "ThemeRenderer", "extract_title"]
