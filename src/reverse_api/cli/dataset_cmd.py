"""CLI commands for maintaining the local boundary dataset."""

from __future__ import annotations

import asyncio
from pathlib import Path  # noqa: TC003 - Typer needs Path at runtime

import typer

from reverse_api.core.config import get_settings
from reverse_api.lib.data_loader import refresh_dataset

dataset_app = typer.Typer()


@dataset_app.command("refresh")
def refresh(
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Local dataset path (default: PARQUET_PATH env var)",
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        help="Remote dataset URL (default: DATASET_URL env var)",
    ),
    max_age_days: int | None = typer.Option(
        None,
        "--max-age-days",
        min=1,
        help="Re-check upstream when the file is older than this (default: DATASET_MAX_AGE_DAYS env var)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Check upstream regardless of the file's age",
    ),
) -> None:
    """Download the dataset if it is missing or stale.

    Sends a conditional request when a local copy exists, so an unchanged
    upstream file is not downloaded again.
    """
    settings = get_settings()
    dest = path or settings.parquet_path

    result = asyncio.run(
        refresh_dataset(
            url or settings.dataset_url,
            dest,
            max_age_days=max_age_days or settings.dataset_max_age_days,
            force=force,
            timeout=settings.dataset_download_timeout,
        )
    )

    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)

    if result.downloaded:
        typer.echo(f"Downloaded {result.local_path} ({result.size_bytes} bytes)")
    elif result.not_modified:
        typer.echo(f"{result.local_path} is up to date")
    else:
        typer.echo(f"{result.local_path} is recent, skipped")
