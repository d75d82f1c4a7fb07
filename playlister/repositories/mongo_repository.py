"""Document-store adapter backed by MongoDB (motor async client)."""
from __future__ import annotations

from typing import Any, Optional, Sequence
from urllib.parse import urlsplit

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from playlister.core.errors import DuplicateEmailError, StoreUnavailableError
from playlister.core.logging import get_logger
from playlister.db.documents import (
    PLAYLISTS_COLLECTION,
    USERS_COLLECTION,
    PlaylistDocument,
    SongDocument,
    UserDocument,
)
from playlister.domain.playlists import canonical_songs
from playlister.repositories.base import SongInput

logger = get_logger(__name__)

DEFAULT_DATABASE = "playlister"
PAIR_PROJECTION = {"name": 1, "ownerEmail": 1}


def _object_id(value: Any) -> Optional[ObjectId]:
    """Parse an identifier; malformed ids mean "not found", never an error."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        logger.debug(f"Ignoring malformed document id {value!r}")
        return None


def _song_documents(songs: Sequence[SongInput] | None) -> list[dict]:
    return [SongDocument(**song).model_dump() for song in canonical_songs(songs)]


class MongoDatabaseManager:
    """Embeds songs inside playlist documents; every write is a single-document operation."""

    def __init__(self, uri: str, *, database: str | None = None, client: Any = None) -> None:
        self.uri = uri
        self._database_name = database or urlsplit(uri).path.lstrip("/") or DEFAULT_DATABASE
        self._client = client
        self._owns_client = client is None
        self._db = None

    # -------------------------- lifecycle --------------------------
    async def init(self) -> None:
        try:
            if self._client is None:
                self._client = AsyncIOMotorClient(self.uri)
            self._db = self._client[self._database_name]
            # First round-trip to the server; also enforces e-mail uniqueness.
            await self._users.create_index("email", unique=True)
        except PyMongoError as exc:
            await self.close()
            raise StoreUnavailableError(f"MongoDB unreachable at {self.uri}: {exc}") from exc
        logger.info(f"[Mongo] Connected at {self.uri} (database {self._database_name})")

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
        self._client = None
        self._db = None

    @property
    def _users(self):
        return self._db[USERS_COLLECTION]

    @property
    def _playlists(self):
        return self._db[PLAYLISTS_COLLECTION]

    # -------------------------- users --------------------------
    async def get_user_by_id(self, user_id: Any) -> Optional[dict]:
        oid = _object_id(user_id)
        if oid is None:
            return None
        return await self._users.find_one({"_id": oid})

    async def get_user_by_email(self, email: str) -> Optional[dict]:
        return await self._users.find_one({"email": email})

    async def create_user(self, *, first_name: str, last_name: str, email: str, password_hash: str) -> dict:
        doc = UserDocument(
            firstName=first_name,
            lastName=last_name,
            email=email,
            passwordHash=password_hash,
        ).model_dump()
        try:
            result = await self._users.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(email) from exc
        doc["_id"] = result.inserted_id
        return doc

    # -------------------------- playlists --------------------------
    async def create_playlist(self, *, name: str, songs: Sequence[SongInput], owner_email: str) -> dict:
        doc = PlaylistDocument(
            name=name,
            ownerEmail=owner_email,
            songs=_song_documents(songs),
        ).model_dump()
        result = await self._playlists.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def get_playlist_by_id(self, playlist_id: Any) -> Optional[dict]:
        oid = _object_id(playlist_id)
        if oid is None:
            return None
        return await self._playlists.find_one({"_id": oid})

    async def get_playlist_pairs(self) -> list[dict]:
        cursor = self._playlists.find({}, PAIR_PROJECTION)
        return await cursor.to_list(length=None)

    async def update_playlist_by_id(
        self,
        playlist_id: Any,
        *,
        name: str,
        owner_email: Optional[str],
        songs: Sequence[SongInput],
    ) -> Optional[dict]:
        oid = _object_id(playlist_id)
        if oid is None:
            return None
        values = PlaylistDocument(
            name=name,
            ownerEmail=owner_email,
            songs=_song_documents(songs),
        ).model_dump(include={"name", "ownerEmail", "songs", "updatedAt"})
        return await self._playlists.find_one_and_update(
            {"_id": oid},
            {"$set": values},
            return_document=ReturnDocument.AFTER,
        )

    async def delete_playlist_by_id(self, playlist_id: Any) -> bool:
        oid = _object_id(playlist_id)
        if oid is None:
            return False
        result = await self._playlists.delete_one({"_id": oid})
        return result.deleted_count > 0
