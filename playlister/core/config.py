"""
Configuration helpers for the Playlister backend.

Exposes a frozen Settings object read once from environment variables so
that repositories and the bootstrap never fetch os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from sqlalchemy.engine import URL, make_url

PROVIDER_MONGODB = "mongodb"
PROVIDER_POSTGRESQL = "postgresql"

_POSTGRES_ALIASES = {"postgresql", "postgres"}
DEFAULT_MONGO_URI = "mongodb://127.0.0.1:27017/playlister"


@dataclass(frozen=True)
class PostgresParams:
    """Discrete connection parameters, used when no full DSN is configured."""

    host: str
    port: int
    database: str
    username: str
    password: str


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_provider: str
    mongo_uri: str
    postgres_uri: str
    postgres: PostgresParams
    sql_echo: bool
    log_level: str

    @property
    def sql_url(self) -> str:
        """Async SQLAlchemy URL; a full DSN wins over the discrete parameters."""
        if self.postgres_uri:
            return _async_driver_url(self.postgres_uri)
        params = self.postgres
        url = URL.create(
            "postgresql+asyncpg",
            username=params.username,
            password=params.password,
            host=params.host,
            port=params.port,
            database=params.database,
        )
        return url.render_as_string(hide_password=False)


def _async_driver_url(dsn: str) -> str:
    # Plain postgres DSNs point at the sync driver; swap in asyncpg.
    url = make_url(dsn)
    if url.drivername in {"postgres", "postgresql"}:
        url = url.set(drivername="postgresql+asyncpg")
    return url.render_as_string(hide_password=False)


def normalize_provider(value: str | None) -> str:
    """Map a raw DB_PROVIDER value onto one of the two recognized providers."""
    provider = (value or "").strip().lower()
    if provider in _POSTGRES_ALIASES:
        return PROVIDER_POSTGRESQL
    return PROVIDER_MONGODB


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _first(*names: str, default: str = "") -> str:
        for name in names:
            value = os.getenv(name)
            if value:
                return value
        return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_provider=normalize_provider(os.getenv("DB_PROVIDER")),
        mongo_uri=_first("DB_CONNECT", "MONGO_URI", default=DEFAULT_MONGO_URI),
        postgres_uri=(os.getenv("POSTGRES_URI") or "").strip(),
        postgres=PostgresParams(
            host=_first("PG_HOST", "POSTGRES_HOST", default="127.0.0.1"),
            port=_int(_first("PG_PORT", "POSTGRES_PORT", default="5432"), 5432),
            database=_first("PG_DATABASE", "POSTGRES_DB", default="playlister"),
            username=_first("PG_USER", "POSTGRES_USER", default="postgres"),
            password=_first("PG_PASSWORD", "POSTGRES_PASSWORD", default="postgres"),
        ),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
