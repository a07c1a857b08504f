from __future__ import annotations

import json

import pytest
import requests

from postsmith.config import PublishingConfig
from postsmith.publishing import (
    Deadline,
    InvalidArgumentError,
    PublishCancelledError,
    RenderRequestTransport,
    RequestContext,
    TransportError,
)
from tests.utils import RecordingSession, make_response


def _transport(settings: PublishingConfig, session: RecordingSession) -> RenderRequestTransport:
    return RenderRequestTransport(settings, session_factory=lambda: session)


def test_posts_payload_to_inbound_host(settings: PublishingConfig, request_context: RequestContext) -> None:
    session = RecordingSession(make_response("<html>page</html>"))

    html = _transport(settings, session).fetch_rendered_output("# Title", request_context)

    assert html == "<html>page</html>"
    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "http://blog.local:8080/admin/post/publish/html"
    assert call["headers"]["Content-Type"] == "application/json; charset=utf-8"
    assert call["timeout"] == settings.render_timeout
    assert isinstance(call["data"], bytes)
    assert json.loads(call["data"].decode("utf-8")) == {
        "theme": "default",
        "markdown": "# Title",
        "html": "",
    }
    assert session.closed is True


def test_uses_https_when_inbound_request_was_secure(settings: PublishingConfig) -> None:
    session = RecordingSession()
    request = RequestContext.from_url("https://example.org")

    _transport(settings, session).fetch_rendered_output("text", request)

    assert session.calls[0]["url"] == "https://example.org/admin/post/publish/html"


def test_payload_is_utf8_encoded(settings: PublishingConfig, request_context: RequestContext) -> None:
    session = RecordingSession()

    _transport(settings, session).fetch_rendered_output("naïve café", request_context)

    body = session.calls[0]["data"]
    assert json.loads(body.decode("utf-8"))["markdown"] == "naïve café"


def test_response_is_returned_as_raw_text(settings: PublishingConfig, request_context: RequestContext) -> None:
    envelope = '{"theme": "default", "markdown": "x", "html": "<p>x</p>"}'
    session = RecordingSession(make_response(envelope, content_type="application/json"))

    assert _transport(settings, session).fetch_rendered_output("x", request_context) == envelope


def test_response_without_charset_is_decoded_as_utf8(
    settings: PublishingConfig, request_context: RequestContext
) -> None:
    session = RecordingSession(make_response("<p>café</p>", content_type="text/html"))

    assert _transport(settings, session).fetch_rendered_output("x", request_context) == "<p>café</p>"


def test_connection_error_raises_transport_error(
    settings: PublishingConfig, request_context: RequestContext
) -> None:
    session = RecordingSession(error=requests.ConnectionError("Connection refused"))

    with pytest.raises(TransportError) as excinfo:
        _transport(settings, session).fetch_rendered_output("x", request_context)

    assert excinfo.value.url == "http://blog.local:8080/admin/post/publish/html"
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert session.closed is True


def test_timeout_raises_transport_error(settings: PublishingConfig, request_context: RequestContext) -> None:
    session = RecordingSession(error=requests.ReadTimeout("read timed out"))

    with pytest.raises(TransportError, match="timed out"):
        _transport(settings, session).fetch_rendered_output("x", request_context)


@pytest.mark.parametrize("status_code", [404, 500, 503])
def test_non_success_status_raises_transport_error(
    settings: PublishingConfig, request_context: RequestContext, status_code: int
) -> None:
    session = RecordingSession(make_response("boom", status_code=status_code))
    assert session.response.status_code == status_code

    with pytest.raises(TransportError) as excinfo:
        _transport(settings, session).fetch_rendered_output("x", request_context)

    assert excinfo.value.status_code == status_code
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)
    assert session.closed is True


def test_custom_endpoint_and_theme(request_context: RequestContext) -> None:
    settings = PublishingConfig(theme="dark", render_endpoint="/render")
    session = RecordingSession()

    _transport(settings, session).fetch_rendered_output("x", request_context)

    call = session.calls[0]
    assert call["url"] == "http://blog.local:8080/render"
    assert json.loads(call["data"])["theme"] == "dark"


def test_deadline_bounds_request_timeout(settings: PublishingConfig, request_context: RequestContext) -> None:
    session = RecordingSession()
    now = [100.0]
    deadline = Deadline(5.0, clock=lambda: now[0])
    now[0] = 102.0

    _transport(settings, session).fetch_rendered_output("x", request_context, deadline=deadline)

    assert session.calls[0]["timeout"] == pytest.approx(3.0)


def test_cancelled_deadline_skips_the_call(settings: PublishingConfig, request_context: RequestContext) -> None:
    session = RecordingSession()
    deadline = Deadline()
    deadline.cancel()

    with pytest.raises(PublishCancelledError):
        _transport(settings, session).fetch_rendered_output("x", request_context, deadline=deadline)

    assert session.calls == []


@pytest.mark.parametrize("markdown", [None, "", "  \n"])
def test_blank_markdown_is_rejected(
    settings: PublishingConfig, request_context: RequestContext, markdown: str | None
) -> None:
    session = RecordingSession()

    with pytest.raises(InvalidArgumentError):
        _transport(settings, session).fetch_rendered_output(markdown, request_context)  # type: ignore[arg-type]

    assert session.calls == []


def test_missing_request_is_rejected(settings: PublishingConfig) -> None:
    with pytest.raises(InvalidArgumentError) as excinfo:
        _transport(settings, RecordingSession()).fetch_rendered_output("x", None)  # type: ignore[arg-type]
    assert excinfo.value.argument == "request"


def test_request_context_validation() -> None:
    with pytest.raises(InvalidArgumentError):
        RequestContext(scheme="ftp", host="example.org")
    with pytest.raises(InvalidArgumentError):
        RequestContext.from_url("/relative/only")
    assert RequestContext.from_url("HTTP://Example.org:81/x").base_url == "http://Example.org:81"
