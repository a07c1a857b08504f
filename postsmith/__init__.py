"""Markdown post publishing pipeline.

Renders authored Markdown to HTML through a rendering endpoint and
persists both artefacts at deterministic locations.
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
