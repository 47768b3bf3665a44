"""Shared test fixtures for a stub boundary dataset and HTTP clients."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from reverse_api.core.database import BoundaryDataset
from reverse_api.core.dependencies import get_dataset
from reverse_api.main import create_app

DATASET_COLUMNS = frozenset(
    {
        "id",
        "parent_id",
        "name",
        "placetype",
        "country",
        "lat",
        "lon",
        "geometry",
        "geometry_bbox",
    }
)


@pytest.fixture
def mock_dataset() -> MagicMock:
    """A stub BoundaryDataset with a fixed column whitelist and no matches."""
    dataset = MagicMock(spec=BoundaryDataset)
    dataset.path = Path("data/test.parquet")
    dataset.columns = DATASET_COLUMNS
    dataset.fetch_rows = AsyncMock(return_value=[])
    return dataset


@pytest.fixture
def app(mock_dataset: MagicMock) -> FastAPI:
    """Full application with the dataset dependency overridden (lifespan not run)."""
    app = create_app()
    app.dependency_overrides[get_dataset] = lambda: mock_dataset
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async test client bound to the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
