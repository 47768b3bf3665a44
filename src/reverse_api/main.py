"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import duckdb
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from reverse_api.core.config import get_settings
from reverse_api.core.database import BoundaryDataset, DatasetQueryError
from reverse_api.core.logging import setup_logging
from reverse_api.lib.reverse import ReverseGeocodeValidationError

QUERY_FAILED_ERROR = "Database query failed"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Open the boundary dataset on startup and close it on shutdown.

    A dataset that cannot be opened aborts startup: the column whitelist
    is required before any query can be built.
    """
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)

    try:
        dataset = BoundaryDataset.open(settings.parquet_path)
    except (OSError, duckdb.Error) as exc:
        logger.critical("Failed to open dataset {}: {}", settings.parquet_path, exc)
        raise

    app.state.dataset = dataset
    logger.info("Using parquet file: {}", dataset.path)

    try:
        yield
    finally:
        dataset.close()
        app.state.dataset = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Reverse API",
        description="Point-in-polygon reverse geocoding against administrative boundaries",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register exception handlers
    @app.exception_handler(ReverseGeocodeValidationError)
    async def validation_error_handler(request: Request, exc: ReverseGeocodeValidationError) -> JSONResponse:
        logger.debug("Rejected {}: {}", request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content={"error": str(exc.kind), "message": exc.message},
        )

    @app.exception_handler(DatasetQueryError)
    async def query_error_handler(request: Request, exc: DatasetQueryError) -> JSONResponse:
        logger.bind(json_output=True, path=request.url.path).error("Query error: {}", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": QUERY_FAILED_ERROR, "message": exc.message},
        )

    # Register middleware and routers
    from reverse_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router())

    return app
