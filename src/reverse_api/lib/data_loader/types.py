"""Data types for the data_loader library."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class RefreshResult:
    """Tracks the outcome of a dataset refresh check.

    Attributes:
        local_path: Local filesystem path of the dataset.
        checked: Whether the upstream source was contacted (False = file recent enough).
        downloaded: Whether a new copy of the file was written.
        not_modified: Whether upstream reported the local copy as current (HTTP 304).
        size_bytes: Bytes written when downloaded.
        error: Error message if the refresh failed, or None.
    """

    local_path: Path
    checked: bool = False
    downloaded: bool = False
    not_modified: bool = False
    size_bytes: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        """Whether the refresh completed without error."""
        return self.error is None
