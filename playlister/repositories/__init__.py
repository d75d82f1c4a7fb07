"""
Persistence adapters.

Two interchangeable implementations of ``DatabaseManager``: MongoDB
(songs embedded in playlist documents) and SQL (users/playlists/songs
tables). ``create_database_manager`` picks exactly one from settings at
process start; services depend on the contract, never on a concrete adapter.
"""
from __future__ import annotations

from playlister.core.config import PROVIDER_POSTGRESQL, Settings, get_settings
from playlister.core.logging import get_logger
from playlister.repositories.base import DatabaseManager

logger = get_logger(__name__)


def create_database_manager(settings: Settings | None = None) -> DatabaseManager:
    """Build the adapter named by DB_PROVIDER; anything unrecognized means MongoDB."""
    settings = settings or get_settings()
    if settings.db_provider == PROVIDER_POSTGRESQL:
        from playlister.repositories.sql_repository import SQLDatabaseManager

        logger.info("[DB] Using PostgreSQL DatabaseManager")
        return SQLDatabaseManager(settings.sql_url, echo=settings.sql_echo)

    from playlister.repositories.mongo_repository import MongoDatabaseManager

    logger.info("[DB] Using MongoDB DatabaseManager")
    return MongoDatabaseManager(settings.mongo_uri)


__all__ = ["DatabaseManager", "create_database_manager"]
