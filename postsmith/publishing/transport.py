"""HTTP client for the Markdown rendering endpoint."""

from __future__ import annotations

from typing import Callable

import requests
from loguru import logger

from postsmith.config import PublishingConfig
from postsmith.errors import InvalidArgumentError, TransportError

from .models import Deadline, PublishedContent, RequestContext

MEDIA_TYPE = "application/json"
CHARSET = "utf-8"
USER_AGENT = "postsmith/0.1"


class RenderRequestTransport:
    """Post Markdown to the rendering endpoint and return the rendered page.

    The endpoint lives on the same scheme and host the inbound request
    arrived on. Each call opens its own session and closes it, and the
    response, on every exit path.
    """

    def __init__(
        self,
        settings: PublishingConfig,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        if settings is None:
            raise InvalidArgumentError("settings")
        self._settings = settings
        self._session_factory = session_factory

    def endpoint_url(self, request: RequestContext) -> str:
        return request.base_url + self._settings.render_endpoint

    def fetch_rendered_output(
        self,
        markdown: str,
        request: RequestContext,
        *,
        deadline: Deadline | None = None,
    ) -> str:
        if markdown is None or not markdown.strip():
            raise InvalidArgumentError("markdown")
        if request is None:
            raise InvalidArgumentError("request")

        if deadline is not None:
            deadline.check("rendering call")
        timeout = self._timeout(deadline)

        url = self.endpoint_url(request)
        payload = PublishedContent(theme=self._settings.theme, markdown=markdown, html="")
        body = payload.model_dump_json().encode(CHARSET)
        headers = {
            "Content-Type": f"{MEDIA_TYPE}; charset={CHARSET}",
            "Accept": "text/html, text/plain;q=0.9, */*;q=0.1",
            "User-Agent": USER_AGENT,
        }

        logger.debug("Requesting rendered output from {} (theme={})", url, payload.theme)
        try:
            with self._session_factory() as session:
                with session.post(url, data=body, headers=headers, timeout=timeout) as response:
                    response.raise_for_status()
                    if "charset" not in response.headers.get("Content-Type", "").lower():
                        response.encoding = CHARSET
                    html = response.text
        except requests.Timeout as exc:
            logger.error("Rendering call to {} timed out after {}s", url, timeout)
            raise TransportError(f"Rendering call to {url} timed out", url=url) from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error("Rendering call to {} returned HTTP {}", url, status)
            raise TransportError(
                f"Rendering call to {url} failed with HTTP {status}", url=url, status_code=status
            ) from exc
        except requests.ConnectionError as exc:
            logger.error("Cannot reach rendering endpoint {}: {}", url, exc)
            raise TransportError(f"Cannot reach rendering endpoint {url}", url=url) from exc
        except requests.RequestException as exc:
            logger.error("Rendering call to {} failed: {}", url, exc)
            raise TransportError(f"Rendering call to {url} failed: {exc}", url=url) from exc

        logger.debug("Received {} characters of rendered output from {}", len(html), url)
        return html

    def _timeout(self, deadline: Deadline | None) -> float:
        timeout = self._settings.render_timeout
        if deadline is not None:
            remaining = deadline.remaining()
            if remaining is not None:
                # urllib3 rejects a zero timeout
                timeout = max(min(timeout, remaining), 0.001)
        return timeout


__all__ = ["CHARSET", "MEDIA_TYPE", "RenderRequestTransport"]
