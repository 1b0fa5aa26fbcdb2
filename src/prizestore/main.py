"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from prizestore.api.middleware import setup_exception_handlers, setup_middleware
from prizestore.core.config import Settings, get_settings
from prizestore.core.database import close_pool, init_pool
from prizestore.core.logging import setup_logging
from prizestore.core.migrations import init_schema

logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("POST", "/prizes", "store a new prize"),
    ("GET", "/prizes?user_id=", "get user prizes"),
    ("GET", "/prizes/{prize_id}", "get one prize"),
    ("PATCH", "/prizes/{prize_id}", "update status"),
    ("DELETE", "/prizes/{prize_id}", "remove claimed prize"),
]


def _log_banner(settings: Settings) -> None:
    logger.info("Prize store service running on port %d", settings.app_port)
    for method, path, purpose in ENDPOINTS:
        logger.info("  %-6s %-20s %s", method, path, purpose)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    if not settings.is_testing:
        setup_logging(level=settings.log_level, log_format=settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting prize store (env=%s)", settings.app_env)
        if not settings.is_testing:
            # Serving traffic against a dead store is worse than not starting
            try:
                pool = init_pool(settings)
                init_schema(pool)
            except Exception:
                logger.exception("Cannot connect to Oracle; check ORACLE_DSN and credentials")
                close_pool()
                raise
            app.state.db_pool = pool
            logger.info("Oracle connected and ready")
            _log_banner(settings)
        yield
        logger.info("Shutting down prize store")
        if not settings.is_testing:
            close_pool()

    application = FastAPI(
        title="Prize Store API",
        description="Record store for won prizes and their claim status",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.state.settings = settings
    application.state.db_pool = None

    setup_middleware(application)
    setup_exception_handlers(application)
    _register_routes(application)

    return application


def _register_routes(app: FastAPI) -> None:
    """Register all API route modules."""
    from prizestore.api.routes.health import router as health_router
    from prizestore.api.routes.prizes import router as prizes_router

    app.include_router(health_router, tags=["health"])
    app.include_router(prizes_router)


# Module-level app instance for uvicorn (uvicorn prizestore.main:app)
app = create_app()
