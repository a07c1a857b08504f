"""High-level orchestration for publishing a post."""

from __future__ import annotations

from loguru import logger

from postsmith.config import PublishingConfig
from postsmith.errors import InvalidArgumentError, PublishError, PublishFailedError
from postsmith.rendering import MarkdownRenderer
from postsmith.storage import ApplicationEnvironment, FileStore

from .models import Deadline, PublishedPostPath, PublishStage, RequestContext
from .transport import RenderRequestTransport

MARKDOWN_FILENAME = "markdown.md"
HTML_FILENAME = "post.html"


class PublishService:
    """Persist Markdown, render it remotely and persist the resulting HTML.

    ``publish_post`` runs three stages strictly in order. A failure stops
    the call and propagates unchanged; artefacts written by earlier stages
    stay on disk; nothing is rolled back or retried here.
    """

    def __init__(
        self,
        settings: PublishingConfig,
        renderer: MarkdownRenderer,
        store: FileStore,
        transport: RenderRequestTransport,
    ) -> None:
        if settings is None:
            raise InvalidArgumentError("settings")
        if renderer is None:
            raise InvalidArgumentError("renderer")
        if store is None:
            raise InvalidArgumentError("store")
        if transport is None:
            raise InvalidArgumentError("transport")
        self._settings = settings
        self._renderer = renderer
        self._store = store
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: PublishingConfig) -> "PublishService":
        """Wire the default renderer, file store and HTTP transport."""
        return cls(
            settings,
            MarkdownRenderer(),
            FileStore(),
            RenderRequestTransport(settings),
        )

    @property
    def settings(self) -> PublishingConfig:
        return self._settings

    # ------------------------------------------------------------------
    def publish_markdown(
        self,
        markdown: str,
        env: ApplicationEnvironment,
        *,
        deadline: Deadline | None = None,
    ) -> str:
        """Write the Markdown source and return its virtual path."""
        _require_text(markdown, "markdown")
        _require(env, "env")
        return self._publish(
            markdown,
            env,
            logical_root=self._settings.markdown_path,
            filename=MARKDOWN_FILENAME,
            failure_message="Markdown not published",
            deadline=deadline,
        )

    def publish_html(
        self,
        html: str,
        env: ApplicationEnvironment,
        *,
        deadline: Deadline | None = None,
    ) -> str:
        """Write the rendered post and return its virtual path."""
        _require_text(html, "html")
        _require(env, "env")
        return self._publish(
            html,
            env,
            logical_root=self._settings.html_path,
            filename=HTML_FILENAME,
            failure_message="Post not published",
            deadline=deadline,
        )

    def get_preview_html(self, markdown: str) -> str:
        """Render Markdown locally; never touches the network."""
        _require_text(markdown, "markdown")
        return self._renderer.render(markdown)

    def get_published_html(
        self,
        markdown: str,
        request: RequestContext,
        *,
        deadline: Deadline | None = None,
    ) -> str:
        """Render Markdown through the rendering endpoint on the inbound host."""
        _require_text(markdown, "markdown")
        _require(request, "request")
        return self._transport.fetch_rendered_output(markdown, request, deadline=deadline)

    def publish_post(
        self,
        markdown: str,
        env: ApplicationEnvironment,
        request: RequestContext,
        *,
        deadline: Deadline | None = None,
    ) -> PublishedPostPath:
        _require_text(markdown, "markdown")
        _require(env, "env")
        _require(request, "request")

        stage = PublishStage.START
        try:
            markdown_path = self.publish_markdown(markdown, env, deadline=deadline)
            stage = _advance(stage, PublishStage.MARKDOWN_PUBLISHED)

            html = self.get_published_html(markdown, request, deadline=deadline)
            stage = _advance(stage, PublishStage.HTML_RENDERED)

            html_path = self.publish_html(html, env, deadline=deadline)
            stage = _advance(stage, PublishStage.COMPLETE)
        except PublishError as exc:
            exc.stage = stage
            logger.error(
                "Publish {} -> {} after {}: {}",
                stage.value,
                PublishStage.FAILED.value,
                type(exc).__name__,
                exc,
            )
            raise

        return PublishedPostPath(markdown=markdown_path, html=html_path)

    # ------------------------------------------------------------------
    def _publish(
        self,
        content: str,
        env: ApplicationEnvironment,
        *,
        logical_root: str,
        filename: str,
        failure_message: str,
        deadline: Deadline | None,
    ) -> str:
        if deadline is not None:
            deadline.check(f"writing {filename}")

        directory = self._store.resolve_directory(env, logical_root)
        result = self._store.write(directory / filename, content)
        if not result:
            logger.warning("{} ({}): {}", failure_message, result.status.value, result.reason)
            raise PublishFailedError(failure_message)

        logger.info("Published {} to {}", filename, result.path)
        return f"{logical_root}/{filename}"


def _advance(current: PublishStage, following: PublishStage) -> PublishStage:
    logger.info("Publish {} -> {}", current.value, following.value)
    return following


def _require(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(name)


def _require_text(value: str | None, name: str) -> None:
    if value is None or not value.strip():
        raise InvalidArgumentError(name)


__all__ = ["HTML_FILENAME", "MARKDOWN_FILENAME", "PublishService"]
