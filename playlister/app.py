"""Process bootstrap: builds the FastAPI app and owns the data-access lifecycle."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from playlister.core.config import Settings, get_settings
from playlister.core.errors import StoreUnavailableError
from playlister.core.logging import get_logger, setup_logger
from playlister.repositories import DatabaseManager, create_database_manager
from playlister.services.playlist_service import PlaylistService

logger = get_logger(__name__)


async def open_database(settings: Settings) -> DatabaseManager:
    """Select the adapter once and connect it; raises StoreUnavailableError."""
    db = create_database_manager(settings)
    await db.init()
    logger.info(f"Database initialized using provider: {settings.db_provider}")
    return db


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    try:
        db = await open_database(settings)
    except StoreUnavailableError:
        logger.exception("Failed to initialize database")
        raise SystemExit(1)
    app.state.db = db
    app.state.playlist_service = PlaylistService(db)
    try:
        yield
    finally:
        await db.close()
        logger.info("Database connection closed")


def get_playlist_service(request: Request) -> PlaylistService:
    """FastAPI dependency handing controllers the process-wide service."""
    return request.app.state.playlist_service


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    setup_logger()
    return FastAPI(title="Playlister API", lifespan=lifespan)
