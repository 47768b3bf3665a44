"""FastAPI dependency injection for the boundary dataset."""

from fastapi import Request

from reverse_api.core.database import BoundaryDataset


def get_dataset(request: Request) -> BoundaryDataset:
    """Return the dataset opened during application startup.

    Raises:
        RuntimeError: If the application lifespan has not opened a dataset.
    """
    dataset: BoundaryDataset | None = getattr(request.app.state, "dataset", None)
    if dataset is None:
        msg = "Boundary dataset not initialized. The application lifespan must run first."
        raise RuntimeError(msg)
    return dataset
