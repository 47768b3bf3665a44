"""Age-based conditional refresh of the local boundary dataset.

A missing or stale file is re-fetched with an ``If-Modified-Since``
request.  New content is streamed to a ``.part`` file and renamed into
place, so a server reading the dataset never sees a partial file.  After
every successful check the file's mtime is bumped to mark it as checked.
"""

from __future__ import annotations

import os
import time
from email.utils import formatdate
from typing import TYPE_CHECKING

import httpx
from loguru import logger
from tqdm import tqdm

from reverse_api.lib.data_loader.types import RefreshResult

if TYPE_CHECKING:
    from pathlib import Path

_SECONDS_PER_DAY = 60 * 60 * 24


def dataset_age_days(path: Path, now: float | None = None) -> float | None:
    """Return the age of a file in days based on its mtime.

    Args:
        path: File to inspect.
        now: Reference timestamp (defaults to the current time).

    Returns:
        Age in days, or None if the file does not exist.
    """
    if not path.exists():
        return None
    reference = time.time() if now is None else now
    return (reference - path.stat().st_mtime) / _SECONDS_PER_DAY


def needs_refresh(path: Path, max_age_days: int, now: float | None = None) -> bool:
    """Decide whether the dataset should be checked upstream.

    Args:
        path: Local dataset path.
        max_age_days: Age threshold in days.
        now: Reference timestamp (defaults to the current time).

    Returns:
        True if the file is missing or older than ``max_age_days``.
    """
    age = dataset_age_days(path, now)
    if age is None:
        logger.info("File does not exist, downloading...")
        return True
    if age > max_age_days:
        logger.info("File is {} days old (>{} days), checking for updates...", int(age), max_age_days)
        return True
    logger.info("File is recent ({} days old), skipping download", int(age))
    return False


def _touch(path: Path) -> None:
    os.utime(path, None)


async def refresh_dataset(
    url: str,
    dest: Path,
    *,
    max_age_days: int = 30,
    force: bool = False,
    timeout: float = 300.0,
) -> RefreshResult:
    """Re-fetch the dataset if it is missing or stale.

    Args:
        url: Remote URL of the dataset.
        dest: Local path to store the dataset at.
        max_age_days: Age threshold in days before checking upstream.
        force: Check upstream regardless of the file's age.
        timeout: HTTP timeout in seconds.

    Returns:
        A RefreshResult describing what happened.
    """
    result = RefreshResult(local_path=dest)

    if not force and not needs_refresh(dest, max_age_days):
        return result

    result.checked = True
    dest.parent.mkdir(parents=True, exist_ok=True)
    part_path = dest.with_suffix(dest.suffix + ".part")

    headers: dict[str, str] = {}
    if dest.exists():
        headers["If-Modified-Since"] = formatdate(dest.stat().st_mtime, usegmt=True)

    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:  # noqa: SIM117
            async with client.stream("GET", url, headers=headers) as response:
                if response.status_code == httpx.codes.NOT_MODIFIED:
                    logger.info("Upstream not modified: {}", dest.name)
                    result.not_modified = True
                else:
                    response.raise_for_status()
                    total = int(response.headers.get("Content-Length", 0)) or None

                    with (
                        part_path.open("wb") as f,
                        tqdm(
                            total=total,
                            unit="B",
                            unit_scale=True,
                            desc=dest.name,
                            leave=True,
                        ) as pbar,
                    ):
                        async for chunk in response.aiter_bytes(chunk_size=65536):
                            f.write(chunk)
                            result.size_bytes += len(chunk)
                            pbar.update(len(chunk))

        if not result.not_modified:
            # Atomic replace
            part_path.replace(dest)
            result.downloaded = True
            logger.info("Downloaded: {} ({} bytes)", dest.name, result.size_bytes)

        _touch(dest)

    except httpx.HTTPError as exc:
        part_path.unlink(missing_ok=True)
        result.error = f"Download failed for {dest.name}: {exc}"
        logger.error(result.error)

    except OSError as exc:
        part_path.unlink(missing_ok=True)
        result.error = f"File write error for {dest.name}: {exc}"
        logger.error(result.error)

    return result
