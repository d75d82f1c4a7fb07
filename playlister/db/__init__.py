"""Database helpers (engine/session factories and schema definitions)."""

from .session import Base, create_engine, create_sessionmaker

__all__ = ["Base", "create_engine", "create_sessionmaker"]
