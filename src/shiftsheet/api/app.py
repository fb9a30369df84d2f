"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shiftsheet.api.errors import install_error_handlers
from shiftsheet.api.routes import export, health
from shiftsheet.core.config import AppSettings
from shiftsheet.core.logging import configure_logging
from shiftsheet.core.protocols import IQueryClient, ISheetStore
from shiftsheet.persistence import create_persistence


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build collaborators once per process, unless injected."""
    configure_logging(app.state.settings.log_level)
    if getattr(app.state, "query_client", None) is None or getattr(app.state, "sheet_store", None) is None:
        app.state.query_client, app.state.sheet_store = create_persistence(app.state.settings)
    yield


def create_app(
    settings: AppSettings | None = None,
    query_client: IQueryClient | None = None,
    sheet_store: ISheetStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are resolved here, not in the lifespan, because CORS origins
    are fixed when the middleware is added.
    """
    if settings is None:
        settings = AppSettings()
    app = FastAPI(
        title="ShiftSheet Transcript Export",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.query_client = query_client
    app.state.sheet_store = sheet_store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    app.include_router(health.router)
    app.include_router(export.router, prefix="/api")
    return app
