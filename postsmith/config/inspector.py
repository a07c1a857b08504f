"""Validation helpers behind the ``config check`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from .app import AppConfig
from .base import load_config


def check_config(path: Path, *, config_cls: type[AppConfig] = AppConfig) -> tuple[dict[str, Any], int, AppConfig | None]:
    """Validate the configuration file and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, config_instance_or_None)``.
    """

    try:
        config = load_config(config_cls, path)
    except FileNotFoundError as exc:
        return _error(path, "missing_file", str(exc)), 2, None
    except ValidationError as exc:
        result = _error(path, "validation_error", "Configuration validation failed")
        result["error"]["details"] = [
            {
                "loc": _format_error_location(err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return result, 3, None
    except PermissionError as exc:
        return _error(path, "permission_error", str(exc)), 2, None
    except ValueError as exc:
        # tomllib.TOMLDecodeError is a ValueError
        return _error(path, "invalid_format", str(exc)), 1, None

    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(config, base_dir=Path(path).parent),
    }
    return result, 0, config


def _error(path: Path, kind: str, message: str) -> dict[str, Any]:
    return {
        "status": "error",
        "config_path": str(path),
        "error": {"type": kind, "message": message},
    }


def _format_error_location(location: Iterable[int | str]) -> str:
    return ".".join(str(part) for part in location)


def _collect_warnings(config: AppConfig, *, base_dir: Path) -> list[str]:
    warnings: list[str] = []
    publishing = config.publishing

    if publishing.markdown_path == publishing.html_path:
        warnings.append("'markdown_path' and 'html_path' point at the same directory")

    app_root = config.app_root if config.app_root.is_absolute() else base_dir / config.app_root
    if not app_root.exists():
        warnings.append(f"'app_root' does not exist yet: {app_root}")

    if publishing.themes_dir is not None:
        themes_dir = publishing.themes_dir
        if not themes_dir.is_absolute():
            themes_dir = base_dir / themes_dir
        if not (themes_dir / f"{publishing.theme}.html").exists():
            warnings.append(
                f"Theme '{publishing.theme}' not found in {themes_dir}; the built-in template will be used"
            )

    if config.web.auth is None or not config.web.auth.enabled:
        warnings.append("Admin API authentication is disabled")

    return warnings


__all__ = ["check_config"]
