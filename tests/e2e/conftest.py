"""E2E test fixtures: a real GeoParquet boundary file queried through DuckDB spatial.

The fixture dataset is written with DuckDB itself.  Tests are skipped when
the spatial extension cannot be installed (e.g. offline runners), unless
``REVERSE_API_REQUIRE_SPATIAL`` is set, in which case they fail instead.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import duckdb
import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport

from reverse_api.main import create_app, lifespan

REQUIRE_SPATIAL_ENV = "REVERSE_API_REQUIRE_SPATIAL"

# Simplified Andorra boundaries.  "Andorra la Vella" and "Escaldes-Engordany"
# share the edge at lon=1.56.
BOUNDARIES = [
    (85632163, "Andorra", "country", "POLYGON ((1.40 42.42, 1.79 42.42, 1.79 42.66, 1.40 42.66, 1.40 42.42))"),
    (85669613, "Andorra la Vella", "region", "POLYGON ((1.45 42.48, 1.56 42.48, 1.56 42.54, 1.45 42.54, 1.45 42.48))"),
    (
        85669621,
        "Escaldes-Engordany",
        "region",
        "POLYGON ((1.56 42.48, 1.62 42.48, 1.62 42.54, 1.56 42.54, 1.56 42.48))",
    ),
]


def _write_boundaries(path: Path) -> None:
    conn = duckdb.connect(":memory:")
    try:
        try:
            conn.execute("INSTALL spatial;")
            conn.execute("LOAD spatial;")
        except duckdb.Error as exc:
            if os.environ.get(REQUIRE_SPATIAL_ENV):
                pytest.fail(f"DuckDB spatial extension unavailable but {REQUIRE_SPATIAL_ENV} is set: {exc}")
            pytest.skip(f"DuckDB spatial extension unavailable: {exc}")

        conn.execute("CREATE TABLE src (id BIGINT, name VARCHAR, placetype VARCHAR, wkt VARCHAR)")
        conn.executemany("INSERT INTO src VALUES (?, ?, ?, ?)", BOUNDARIES)
        conn.execute(
            f"""
            COPY (
                SELECT
                    id,
                    name,
                    placetype,
                    geom AS geometry,
                    {{
                        'xmin': ST_XMin(geom),
                        'ymin': ST_YMin(geom),
                        'xmax': ST_XMax(geom),
                        'ymax': ST_YMax(geom)
                    }} AS geometry_bbox
                FROM (SELECT id, name, placetype, ST_GeomFromText(wkt) AS geom FROM src)
            ) TO '{path.as_posix()}' (FORMAT PARQUET)
            """
        )
    finally:
        conn.close()


@pytest.fixture(scope="session")
def boundaries_parquet(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Write the Andorra fixture dataset once per session."""
    path = tmp_path_factory.mktemp("data") / "whosonfirst-data-admin-andorra.parquet"
    _write_boundaries(path)
    return path


@pytest.fixture
async def app(boundaries_parquet: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[FastAPI]:
    """Create the app and run its lifespan so the dataset is opened for real."""
    monkeypatch.setenv("PARQUET_PATH", str(boundaries_parquet))
    _app = create_app()
    async with lifespan(_app):
        yield _app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client bound to the live app."""
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
