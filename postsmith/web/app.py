"""FastAPI application factory and routing definitions."""

from __future__ import annotations

import secrets
from typing import Any, Callable

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from loguru import logger
from pydantic import BaseModel

from postsmith import __version__
from postsmith.config import AppConfig, WebAuthConfig
from postsmith.errors import (
    InvalidArgumentError,
    PublishCancelledError,
    PublishError,
    TransportError,
)
from postsmith.publishing import PublishedContent, PublishService, RequestContext
from postsmith.rendering import ThemeRenderer
from postsmith.storage import ApplicationEnvironment


class MarkdownPreviewRequest(BaseModel):
    value: str | None = None


class MarkdownPreviewResponse(BaseModel):
    value: str


class PublishPostRequest(BaseModel):
    markdown: str | None = None


class PublishPostResponse(BaseModel):
    markdown: str
    html: str


def create_app(
    service: PublishService,
    config: AppConfig | None = None,
    *,
    theme_renderer: ThemeRenderer | None = None,
) -> FastAPI:
    """Creates the admin API around ``service``."""
    config = config or AppConfig()
    auth_dependency = _build_auth_dependency(config.web.auth)
    env = ApplicationEnvironment.from_path(config.app_root)
    themes = theme_renderer or ThemeRenderer(themes_dir=service.settings.themes_dir)

    app = FastAPI(
        title=config.web.title,
        description="Publish Markdown posts as rendered HTML.",
        version=__version__,
    )

    @app.exception_handler(PublishError)
    async def publish_error_handler(request: Request, exc: PublishError) -> JSONResponse:
        status_code = _status_for(exc)
        logger.warning("{} {} failed with {}: {}", request.method, request.url.path, type(exc).__name__, exc)
        stage = exc.stage.value if exc.stage is not None else None
        return JSONResponse(status_code=status_code, content={"detail": str(exc), "stage": stage})

    @app.get("/health", summary="Health Check", tags=["Monitoring"])
    async def health_check() -> dict[str, str]:
        """Check if the API is running."""
        return {"status": "ok"}

    @app.post(
        "/admin/post/preview/html",
        summary="Preview Markdown",
        tags=["Posts"],
        response_model=MarkdownPreviewResponse,
    )
    def preview_html(
        payload: MarkdownPreviewRequest,
        _: None = Depends(auth_dependency),
    ) -> MarkdownPreviewResponse:
        """Render Markdown locally for the editor preview."""
        return MarkdownPreviewResponse(value=service.get_preview_html(payload.value or ""))

    @app.post(
        service.settings.render_endpoint,
        summary="Render Post Page",
        tags=["Posts"],
        response_class=HTMLResponse,
    )
    def publish_html(payload: PublishedContent) -> HTMLResponse:
        """Render the posted Markdown into a themed HTML page."""
        return HTMLResponse(themes.render(payload.markdown, payload.theme))

    # Sync handler: publishing blocks on the rendering call back into this app.
    @app.post(
        "/admin/post/publish",
        summary="Publish Post",
        tags=["Posts"],
        response_model=PublishPostResponse,
    )
    def publish_post(
        payload: PublishPostRequest,
        request: Request,
        _: None = Depends(auth_dependency),
    ) -> PublishPostResponse:
        """Persist the Markdown, render it and persist the HTML page."""
        context = _request_context(request)
        logger.info("Publish requested via {}", context.base_url)
        paths = service.publish_post(payload.markdown or "", env, context)
        return PublishPostResponse(**paths.to_dict())

    return app


def _request_context(request: Request) -> RequestContext:
    host = request.headers.get("host") or request.url.netloc
    return RequestContext(scheme=request.url.scheme, host=host)


def _status_for(exc: PublishError) -> int:
    if isinstance(exc, InvalidArgumentError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, TransportError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, PublishCancelledError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _build_auth_dependency(auth_config: WebAuthConfig | None) -> Callable[..., Any]:
    """Return a dependency that validates the configured auth token."""

    if not auth_config or not auth_config.enabled:
        async def _no_auth() -> None:  # pragma: no cover - trivial branch
            return None

        return _no_auth

    expected_token = auth_config.token_secret
    header_alias = auth_config.header_name

    async def _verify_token(
        provided_token: str | None = Header(default=None, alias=header_alias),
    ) -> None:
        if provided_token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing authentication token.",
            )

        if not secrets.compare_digest(provided_token, expected_token):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication token.",
            )

    return _verify_token
