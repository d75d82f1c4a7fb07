"""
Playlist use cases called by the store controllers.

Ownership is decided by e-mail: a playlist belongs to the caller when the
user found under the playlist's ``ownerEmail`` is the caller. Every result
is normalized before it is returned, whichever adapter produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from playlister.core.logging import get_logger
from playlister.domain.playlists import entity_id, normalize_pairs, normalize_playlist
from playlister.repositories.base import DatabaseManager

logger = get_logger(__name__)


class PlaylistServiceError(Exception):
    """Base class for playlist use-case failures."""


class UnauthorizedError(PlaylistServiceError):
    pass


class PlaylistNotFoundError(PlaylistServiceError):
    pass


class NotOwnerError(PlaylistServiceError):
    pass


class ValidationError(PlaylistServiceError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class PlaylistService:
    """Wraps a DatabaseManager with ownership checks and canonical output."""

    db: DatabaseManager

    # -------------------------------------- helpers --------------------------------------
    async def _caller(self, user_id: Any) -> dict:
        user = await self.db.get_user_by_id(str(user_id))
        if not user:
            raise UnauthorizedError(f"Unknown user {user_id}")
        return user

    async def _owned_playlist(self, user_id: Any, playlist_id: Any) -> dict:
        playlist = await self.db.get_playlist_by_id(playlist_id)
        if not playlist:
            raise PlaylistNotFoundError(f"Playlist {playlist_id} not found")
        owner = await self.db.get_user_by_email(playlist.get("ownerEmail"))
        if not owner or entity_id(owner) != str(user_id):
            logger.debug(f"User {user_id} does not own playlist {playlist_id}")
            raise NotOwnerError(f"Playlist {playlist_id} is not owned by user {user_id}")
        return playlist

    # -------------------------------------- use cases --------------------------------------
    async def create_playlist(
        self,
        user_id: Any,
        name: Optional[str],
        songs: Sequence[Mapping[str, Any]] | None = None,
        owner_email: Optional[str] = None,
    ) -> dict:
        me = await self._caller(user_id)
        if not name:
            raise ValidationError("Playlist name is required")
        created = await self.db.create_playlist(
            name=name,
            songs=list(songs or []),
            owner_email=owner_email or me["email"],
        )
        return normalize_playlist(created)

    async def get_playlist(self, user_id: Any, playlist_id: Any) -> dict:
        await self._caller(user_id)
        return normalize_playlist(await self._owned_playlist(user_id, playlist_id))

    async def get_playlist_pairs(self, user_id: Any) -> list[dict]:
        """Pairs of the caller's playlists; an unknown caller simply has none."""
        user = await self.db.get_user_by_id(str(user_id))
        if not user:
            return []
        pairs = await self.db.get_playlist_pairs()
        return normalize_pairs(p for p in pairs if p.get("ownerEmail") == user["email"])

    async def list_playlists(self, user_id: Any) -> list[dict]:
        await self._caller(user_id)
        playlists = []
        for pair in await self.db.get_playlist_pairs():
            raw = await self.db.get_playlist_by_id(entity_id(pair))
            if raw:
                playlists.append(normalize_playlist(raw))
        return playlists

    async def update_playlist(
        self,
        user_id: Any,
        playlist_id: Any,
        *,
        name: Optional[str] = None,
        songs: Sequence[Mapping[str, Any]] | None = None,
    ) -> dict:
        await self._caller(user_id)
        current = await self._owned_playlist(user_id, playlist_id)
        updated = await self.db.update_playlist_by_id(
            playlist_id,
            name=name if name is not None else current.get("name"),
            owner_email=current.get("ownerEmail"),
            songs=list(songs or []),
        )
        if not updated:
            raise PlaylistNotFoundError(f"Playlist {playlist_id} not updated")
        return normalize_playlist(updated)

    async def delete_playlist(self, user_id: Any, playlist_id: Any) -> None:
        await self._caller(user_id)
        await self._owned_playlist(user_id, playlist_id)
        if not await self.db.delete_playlist_by_id(playlist_id):
            raise PlaylistNotFoundError(f"Playlist {playlist_id} not found")
