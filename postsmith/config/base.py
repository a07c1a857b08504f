"""Base configuration model and TOML loader."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

ConfigT = TypeVar("ConfigT", bound="BaseConfig")


class BaseConfig(BaseModel):
    """Common settings shared by every configuration model.

    Unknown keys are rejected and instances are immutable once loaded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


def load_config(model: type[ConfigT], path: Path) -> ConfigT:
    """Load a TOML file and validate it against ``model``."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("rb") as fp:
        data = tomllib.load(fp)
    return model.model_validate(data)


__all__ = ["BaseConfig", "load_config"]
