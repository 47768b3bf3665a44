"""Data loader library — keep the local boundary dataset current.

Public API for checking the dataset's age and conditionally re-fetching
it from its upstream source.
"""

from reverse_api.lib.data_loader.refresher import dataset_age_days, needs_refresh, refresh_dataset
from reverse_api.lib.data_loader.types import RefreshResult

__all__ = [
    "RefreshResult",
    "dataset_age_days",
    "needs_refresh",
    "refresh_dataset",
]
