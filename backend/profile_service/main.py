"""User Profile API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {success, error, code} envelope
    - CORS, compression, secure headers and rate limiting configured from settings
    - The database session manager is created in the lifespan and stored on
      app.state; it is disposed on shutdown

Design Decisions:
    - create_app(settings) factory: tests build apps with their own settings
      (e.g. production error-message suppression) without touching env vars
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.middleware import SlowAPIMiddleware

from profile_service.api.error_handlers import register_error_handlers
from profile_service.api.middleware import (
    RequestLoggingMiddleware, SecurityHeadersMiddleware,
)
from profile_service.api.rate_limiting import build_limiter
from profile_service.api.routes import health, users
from profile_service.config import Settings, get_settings
from profile_service.infrastructure.database import DatabaseSessionManager
from profile_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    owns_manager = getattr(app.state, "db_manager", None) is None
    if owns_manager:
        app.state.db_manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            echo=settings.database_echo,
        )
    logger.info(
        f"{settings.service_name} started in {settings.environment} mode",
    )
    yield
    logger.info(f"{settings.service_name} shutting down")
    if owns_manager:
        await app.state.db_manager.close()
        app.state.db_manager = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application: middleware, error handlers, routes."""
    settings = settings or get_settings()
    app = FastAPI(
        title="User Profile API", version=settings.version, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = None
    app.state.limiter = build_limiter(settings)

    # Added innermost first: SecurityHeaders wraps everything
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    register_error_handlers(app)

    # Routes: explicit registration
    app.include_router(health.root_router)
    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "profile_service.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
