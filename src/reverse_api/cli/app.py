"""Typer CLI root application with serve command."""

import typer

from reverse_api.core.config import get_settings
from reverse_api.core.logging import setup_logging

app = typer.Typer(name="reverse-api", help="Administrative boundary reverse geocoding service")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str | None = typer.Option(None, "--host", help="Bind host (default: HOST env var)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: PORT env var)"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "reverse_api.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from reverse_api.cli.dataset_cmd import dataset_app

    app.add_typer(dataset_app, name="dataset", help="Boundary dataset commands")


_register_subcommands()
