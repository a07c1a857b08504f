"""Pytest helpers for path configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from postsmith.config import PublishingConfig  # noqa: E402
from postsmith.publishing import RequestContext  # noqa: E402
from postsmith.storage import ApplicationEnvironment  # noqa: E402


@pytest.fixture()
def settings() -> PublishingConfig:
    return PublishingConfig(
        markdown_path="App_Data/posts/markdown",
        html_path="App_Data/posts/html",
        theme="default",
    )


@pytest.fixture()
def env(tmp_path: Path) -> ApplicationEnvironment:
    root = tmp_path / "site"
    root.mkdir()
    return ApplicationEnvironment.from_path(root)


@pytest.fixture()
def request_context() -> RequestContext:
    return RequestContext(scheme="http", host="blog.local:8080")
