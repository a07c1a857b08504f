"""Command line interface for postsmith."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import typer
import uvicorn
from loguru import logger

from .config import AppConfig, PublishingConfig, load_config
from .config.inspector import check_config
from .errors import PublishError
from .logs import configure_logging
from .publishing import Deadline, PublishService, RequestContext
from .rendering import MarkdownRenderer
from .storage import ApplicationEnvironment, FileStore
from .web import create_app


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            logger.info("Loading configuration from {}", self.config_path)
            self._config = load_config(AppConfig, self.config_path)
        return self._config

    def resolve(self, path: Path) -> Path:
        """Resolve ``path`` relative to the configuration file's directory."""
        if path.is_absolute():
            return path
        return (self.config_path.parent / path).resolve()


app = typer.Typer(help="Publish Markdown posts as rendered HTML")
config_app = typer.Typer(help="Validate configuration files")
app.add_typer(config_app, name="config")


def _default_config_path() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    return repo_root / "config" / "example.toml"


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _environment(state: CLIState, config: AppConfig) -> ApplicationEnvironment:
    return ApplicationEnvironment.from_path(state.resolve(config.app_root))


def _settings(state: CLIState, config: AppConfig) -> PublishingConfig:
    settings = config.publishing
    if settings.themes_dir is not None:
        settings = settings.model_copy(update={"themes_dir": state.resolve(settings.themes_dir)})
    return settings


def _read_markdown(path: Path) -> str:
    content = FileStore().read(path)
    if content is None:
        logger.error("Markdown file not found: {}", path)
        _exit(1)
    return content or ""


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
) -> None:
    """Initialise CLI state."""

    ctx.obj = CLIState(config_path=config.resolve())

    if ctx.invoked_subcommand is None:
        logger.warning("No command provided. Try 'status' or 'publish --help'.")
        _exit(0)


@app.command(help="Show configuration and resolved publishing directories")
def status(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    settings = config.publishing
    env = _environment(state, config)
    store = FileStore()

    logger.info("=== General Configuration ===")
    logger.info("Application root: {}", env.application_root)
    logger.info("Logging level: {}", config.logging_level)
    logger.info("Log file: {}", config.log_file or "disabled")

    logger.info("=== Publishing ===")
    for label, logical in (("Markdown", settings.markdown_path), ("HTML", settings.html_path)):
        directory = store.resolve_directory(env, logical)
        logger.info("{} root: {} -> {} (exists={})", label, logical, directory, directory.exists())
    logger.info("Theme: {}", settings.theme)
    logger.info("Render endpoint: {} (timeout={}s)", settings.render_endpoint, settings.render_timeout)

    auth = config.web.auth
    logger.info("Admin auth: {}", "enabled" if auth and auth.enabled else "disabled")


@config_app.command("check", help="Validate the configuration file")
def config_check(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    result, exit_code, _ = check_config(state.config_path)
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    if exit_code:
        _exit(exit_code)


@app.command(help="Render a Markdown file locally and print the HTML")
def preview(
    source: Path = typer.Argument(..., help="Markdown file to render"),
) -> None:
    markdown = _read_markdown(source)
    typer.echo(MarkdownRenderer().render(markdown))


@app.command(help="Publish a Markdown file through a running rendering endpoint")
def publish(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Markdown file to publish"),
    base_url: str = typer.Option(
        "http://127.0.0.1:8000",
        "--base-url",
        help="Scheme and host serving the rendering endpoint",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.0,
        help="Overall deadline in seconds for the publish call",
    ),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    markdown = _read_markdown(source)

    service = PublishService.from_settings(_settings(state, config))
    env = _environment(state, config)

    try:
        request = RequestContext.from_url(base_url)
        paths = service.publish_post(markdown, env, request, deadline=Deadline(timeout))
    except PublishError as exc:
        stage = exc.stage.value if exc.stage is not None else "validation"
        logger.error("Publishing {} failed after {}: {}", source, stage, exc)
        _exit(1)
        return

    typer.echo(json.dumps(paths.to_dict(), indent=2, ensure_ascii=False))


@app.command(help="Run the publishing API server")
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", help="Host to bind the API server to"),
    port: int = typer.Option(8000, help="Port to bind the API server to"),
    dry_run: bool = typer.Option(
        False,
        help="Build the application and report status without running the server",
    ),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()

    service = PublishService.from_settings(_settings(state, config))
    app_instance = create_app(
        service,
        config.model_copy(update={"app_root": state.resolve(config.app_root)}),
    )
    logger.info("Registered {} routes", len(app_instance.routes))

    if dry_run:
        logger.info("[Dry Run] Server will not be started.")
        return

    log_file = state.resolve(config.log_file) if config.log_file is not None else None
    configure_logging(config.logging_level, log_file)
    uvicorn.run(app_instance, host=host, port=port)


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
