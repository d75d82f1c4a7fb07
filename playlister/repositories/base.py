"""Data-access contract implemented by every store adapter."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

SongInput = Mapping[str, Any]


@runtime_checkable
class DatabaseManager(Protocol):
    """
    Operations the services call, independent of the backing store.

    Reads that find nothing return ``None``; writes raise on constraint
    violations (see ``playlister.core.errors``). Records are plain dicts in
    the store's native shape and are normalized by the caller.
    """

    # lifecycle
    async def init(self) -> None: ...

    async def close(self) -> None: ...

    # users
    async def get_user_by_id(self, user_id: Any) -> Optional[dict]: ...

    async def get_user_by_email(self, email: str) -> Optional[dict]: ...

    async def create_user(self, *, first_name: str, last_name: str, email: str, password_hash: str) -> dict: ...

    # playlists
    async def create_playlist(self, *, name: str, songs: Sequence[SongInput], owner_email: str) -> dict: ...

    async def get_playlist_by_id(self, playlist_id: Any) -> Optional[dict]: ...

    async def get_playlist_pairs(self) -> list[dict]: ...

    async def update_playlist_by_id(
        self,
        playlist_id: Any,
        *,
        name: str,
        owner_email: Optional[str],
        songs: Sequence[SongInput],
    ) -> Optional[dict]: ...

    async def delete_playlist_by_id(self, playlist_id: Any) -> bool: ...
