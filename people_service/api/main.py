"""FastAPI application entrypoint for the people service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from people_service.api.middleware.logging import LoggingMiddleware
from people_service.api.openapi import install_openapi
from people_service.api.routes import health, people
from people_service.core.config import Settings, get_settings
from people_service.core.database import DatabaseManager
from people_service.core.exceptions import ApplicationError
from people_service.core.observability import setup_tracing

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[DatabaseManager] = None) -> FastAPI:
    """Build the application around an explicitly provided database handle."""

    settings = settings or get_settings()
    database = database or DatabaseManager(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """Acquire the database handle before serving and release it on shutdown."""

        await database.initialize()
        try:
            yield
        finally:
            await database.close()

    docs_enabled = settings.ENABLE_API_DOCS
    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
        debug=settings.DEBUG,
        docs_url=settings.DOCS_URL if docs_enabled else None,
        openapi_url=settings.OPENAPI_URL if docs_enabled else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    if settings.ENABLE_TRACING:
        setup_tracing(settings, app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    app.include_router(people.router)
    app.include_router(health.router)

    if docs_enabled:
        install_openapi(app)

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})

    # Mounted last so it only sees paths no route claimed.
    if settings.STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; static files disabled", settings.STATIC_DIR)

    return app


app = create_app()
