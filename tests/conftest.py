from __future__ import annotations

import sys
from pathlib import Path

import pytest
from argon2 import PasswordHasher
from mongomock_motor import AsyncMongoMockClient

# Make the playlister package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from playlister.core import config as core_config  # noqa: E402
from playlister.repositories.mongo_repository import MongoDatabaseManager  # noqa: E402
from playlister.repositories.sql_repository import SQLDatabaseManager  # noqa: E402


@pytest.fixture(scope="session")
def password_hash() -> str:
    return PasswordHasher().hash("aaaaaaaa")


@pytest.fixture()
def clean_settings():
    """Force get_settings() to re-read the environment around a test."""
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
async def sql_db(tmp_path):
    """SQL adapter on a temporary SQLite file, disposed after the test."""
    manager = SQLDatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await manager.init()
    yield manager
    await manager.close()


@pytest.fixture()
async def mongo_db():
    """Mongo adapter on an in-memory mongomock client."""
    manager = MongoDatabaseManager(
        "mongodb://127.0.0.1:27017/playlister_test",
        client=AsyncMongoMockClient(),
    )
    await manager.init()
    yield manager
    await manager.close()


@pytest.fixture(params=["mongodb", "postgresql"])
async def db(request, tmp_path):
    """Either adapter; tests using it must hold for both stores."""
    if request.param == "postgresql":
        manager = SQLDatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}")
    else:
        manager = MongoDatabaseManager(
            "mongodb://127.0.0.1:27017/playlister_contract",
            client=AsyncMongoMockClient(),
        )
    await manager.init()
    yield manager
    await manager.close()


@pytest.fixture()
async def joe(db, password_hash) -> dict:
    return await db.create_user(
        first_name="Joe",
        last_name="Shmo",
        email="joe@shmo.com",
        password_hash=password_hash,
    )
