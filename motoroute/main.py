"""
FastAPI application setup with dependency injection.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from motoroute.config import get_settings
from motoroute.core.error_handlers import setup_error_handlers
from motoroute.core.logging import configure_logging
from motoroute.middleware import RequestContextMiddleware

settings = get_settings()

configure_logging(settings.log_level.value, settings.log_format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: log startup and dispose of the database engine on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    yield

    logger.info("Shutting down application")
    from motoroute.core.db import get_engine

    if get_engine.cache_info().currsize:
        await get_engine().dispose()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    # Assigns request ids and logs timing for every request
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from motoroute.api import trips_router, admin_router, health_router
    app.include_router(trips_router)
    app.include_router(admin_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()


@app.get("/")
async def root():
    """Root endpoint for basic service information."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running"
    }
