"""Test doubles shared across test modules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import requests
from loguru import logger

from postsmith.publishing import Deadline, RequestContext, TransportError


class StubTransport:
    """Stands in for RenderRequestTransport and records every call."""

    def __init__(self, html: str = "<p>rendered</p>", error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.calls: list[tuple[str, RequestContext, Deadline | None]] = []

    def fetch_rendered_output(
        self,
        markdown: str,
        request: RequestContext,
        *,
        deadline: Deadline | None = None,
    ) -> str:
        self.calls.append((markdown, request, deadline))
        if self.error is not None:
            raise self.error
        return self.html


def unreachable_transport() -> StubTransport:
    return StubTransport(error=TransportError("Cannot reach rendering endpoint http://blog.local:8080"))


def make_response(
    body: str = "<p>ok</p>",
    *,
    status_code: int = 200,
    content_type: str = "text/html; charset=utf-8",
    url: str = "http://blog.local:8080/admin/post/publish/html",
) -> requests.Response:
    """Build a fully consumed ``requests.Response``."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response._content_consumed = True
    if content_type:
        response.headers["Content-Type"] = content_type
    response.url = url
    return response


class RecordingSession:
    """Minimal ``requests.Session`` replacement used by transport tests."""

    def __init__(self, response: requests.Response | None = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else make_response()
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def __enter__(self) -> "RecordingSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


class TestClientSession:
    """Route transport calls into a FastAPI ``TestClient``."""

    __test__ = False

    def __init__(self, client: Any) -> None:
        self._client = client
        self.closed = False

    def __enter__(self) -> "TestClientSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def post(self, url: str, *, data: bytes, headers: dict[str, str], timeout: float) -> requests.Response:  # noqa: ARG002
        reply = self._client.post(url, content=data, headers=headers)
        return make_response(
            reply.text,
            status_code=reply.status_code,
            content_type=reply.headers.get("content-type", ""),
            url=url,
        )


@contextmanager
def capture_logs(level: str = "INFO") -> Iterator[list[str]]:
    """Collect Loguru messages emitted inside the block."""

    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level=level)
    try:
        yield messages
    finally:
        logger.remove(handler_id)
