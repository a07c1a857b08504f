"""Themed page rendering for published posts."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import BaseLoader, Environment, FileSystemLoader, select_autoescape
from loguru import logger

from .markup import MarkdownRenderer


_DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ title }}</title>
</head>
<body class="theme-{{ theme }}">
<article class="post">
{{ body | safe }}
</article>
</body>
</html>
"""

_HEADING_PATTERN = re.compile(r"^\s{0,3}#{1,6}\s+(?P<title>.+?)\s*#*\s*$", re.MULTILINE)


class ThemeRenderer:
    """Render Markdown into a complete HTML page for a named theme.

    Themes are looked up as ``<themes_dir>/<theme>.html``; when the file is
    missing the built-in template is used instead.
    """

    def __init__(
        self,
        markdown_renderer: MarkdownRenderer | None = None,
        *,
        themes_dir: Path | None = None,
    ) -> None:
        self._markdown = markdown_renderer or MarkdownRenderer()
        self._themes_dir = Path(themes_dir) if themes_dir is not None else None
        self._default = Environment(
            loader=BaseLoader(),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        ).from_string(_DEFAULT_TEMPLATE)
        self._themes: Environment | None = None
        if self._themes_dir is not None:
            self._themes = Environment(
                loader=FileSystemLoader(str(self._themes_dir)),
                autoescape=select_autoescape(["html"]),
                trim_blocks=True,
                lstrip_blocks=True,
            )

    def has_theme(self, theme: str) -> bool:
        return self._themes_dir is not None and (self._themes_dir / f"{theme}.html").is_file()

    def render(self, markdown_text: str | None, theme: str) -> str:
        body = self._markdown.render(markdown_text)
        context = {
            "title": extract_title(markdown_text) or "Untitled",
            "theme": theme,
            "body": body,
            "markdown": markdown_text or "",
        }
        if self._themes is not None and self.has_theme(theme):
            template = self._themes.get_template(f"{theme}.html")
        else:
            if self._themes_dir is not None:
                logger.warning("Theme '{}' not found in {}; using built-in template", theme, self._themes_dir)
            template = self._default
        return template.render(**context)


def extract_title(markdown_text: str | None) -> str | None:
    """Return the text of the first Markdown heading, if any."""
    if not markdown_text:
        return None
    match = _HEADING_PATTERN.search(markdown_text)
    return match.group("title") if match else None


__all__ = ["ThemeRenderer", "extract_title"]
