"""Helpers for configuration values that point at the process environment."""

from __future__ import annotations

import os

ENV_PREFIX = "env:"


def resolve_env_reference(value: str | None, *, required: bool = True) -> str | None:
    """Expand ``"env:NAME"`` into the value of the ``NAME`` environment variable.

    Secrets such as the admin API token are usually kept out of the TOML
    file this way. Plain strings and ``None`` are returned untouched. A
    reference to an unset or empty variable raises :class:`OSError` when
    ``required`` is true and yields ``None`` otherwise.
    """

    if value is None or not value.startswith(ENV_PREFIX):
        return value

    name = value[len(ENV_PREFIX):].strip()
    resolved = os.environ.get(name, "")
    if resolved:
        return resolved
    if required:
        raise OSError(f"Environment variable '{name}' referenced by configuration is not set")
    return None


__all__ = ["ENV_PREFIX", "resolve_env_reference"]
