"""Markdown to HTML conversion."""

from __future__ import annotations

from typing import Sequence

import markdown as md

DEFAULT_EXTENSIONS: tuple[str, ...] = ("tables", "fenced_code")


class MarkdownRenderer:
    """Convert Markdown text into an HTML fragment.

    Every call builds a fresh ``markdown.Markdown`` instance, so nothing
    leaks between renders. ``None`` and empty input render to ``""``.
    """

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        self._extensions = list(extensions if extensions is not None else DEFAULT_EXTENSIONS)

    def render(self, markdown_text: str | None) -> str:
        if not markdown_text:
            return ""
        converter = md.Markdown(extensions=self._extensions, output_format="html")
        return converter.convert(markdown_text)


__all__ = ["DEFAULT_EXTENSIONS", "MarkdownRenderer"]
