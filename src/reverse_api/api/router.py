"""Root API router and middleware registration."""

from fastapi import APIRouter, FastAPI

from reverse_api.api.middleware import SecurityHeadersMiddleware, setup_cors
from reverse_api.core.config import Settings


def create_router() -> APIRouter:
    """Create the root API router with all sub-routers included.

    Returns:
        Configured API router.
    """
    from reverse_api.api.health import health_router
    from reverse_api.api.reverse import reverse_router

    root_router = APIRouter()
    root_router.include_router(health_router)
    root_router.include_router(reverse_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
