"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import Settings, get_settings
from shared.logging_config import configure_logging

from .dependencies import ServiceContainer
from .errors import register_exception_handlers
from .routes import health
from modules.auth.routes import router as auth_router
from modules.events.routes import router as events_router
from modules.documents.routes import router as documents_router
from modules.gallery.routes import router as gallery_router
from modules.announcements.routes import router as announcements_router
from modules.residents.routes import router as residents_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings: Settings = app.state.container.settings
    configure_logging(settings.log_level)
    logger.info(
        "Starting %s %s (%s, backend=%s)",
        settings.app_name, settings.app_version, settings.environment, settings.backend,
    )
    if settings.dev_bypass_active:
        logger.warning("Development token bypass is ENABLED")
    yield
    app.state.container.close()
    logger.info("Shutting down %s", settings.app_name)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())
        container: Pre-built service container; tests pass one backed by
            in-memory collaborators

    Returns:
        Configured FastAPI instance
    """
    if container is None:
        container = ServiceContainer.from_settings(settings or get_settings())
    settings = container.settings

    app = FastAPI(
        title=settings.app_name,
        description="Residential community portal API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(events_router, prefix="/api/events", tags=["events"])
    app.include_router(documents_router, prefix="/api/documents", tags=["documents"])
    app.include_router(gallery_router, prefix="/api/gallery", tags=["gallery"])
    app.include_router(announcements_router, prefix="/api/announcements", tags=["announcements"])
    app.include_router(residents_router, prefix="/api/residents", tags=["residents"])

    return app
