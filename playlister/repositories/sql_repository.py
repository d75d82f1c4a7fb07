"""Relational-store adapter backed by SQLAlchemy's asyncio extension."""
from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from playlister.core.errors import DuplicateEmailError, OwnerNotFoundError, StoreUnavailableError
from playlister.core.logging import get_logger
from playlister.db.models import Playlist, Song, User
from playlister.db.session import Base, create_engine, create_sessionmaker
from playlister.domain.playlists import VIDEO_ID_FIELD, canonical_songs
from playlister.repositories.base import SongInput

logger = get_logger(__name__)

# Integer columns are 32-bit on PostgreSQL.
MAX_INT_ID = 2**31 - 1


def _int_id(value: Any) -> Optional[int]:
    """Primary keys are integers; anything else cannot match a row."""
    try:
        pk = int(str(value))
    except (TypeError, ValueError):
        pk = None
    if pk is None or not 0 < pk <= MAX_INT_ID:
        logger.debug(f"Ignoring malformed row id {value!r}")
        return None
    return pk


def _user_to_dict(entity: User) -> dict:
    return {
        "id": entity.id,
        "firstName": entity.first_name,
        "lastName": entity.last_name,
        "email": entity.email,
        "passwordHash": entity.password_hash,
        "createdAt": entity.created_at,
        "updatedAt": entity.updated_at,
    }


def _song_to_dict(entity: Song) -> dict:
    return {
        "title": entity.title,
        "artist": entity.artist,
        "year": entity.year,
        VIDEO_ID_FIELD: entity.youtube_id,
    }


def _playlist_to_dict(entity: Playlist) -> dict:
    return {
        "id": entity.id,
        "name": entity.name,
        "ownerEmail": entity.owner_email,
        "ownerUserId": entity.owner_user_id,
        "songs": [_song_to_dict(song) for song in entity.songs],
        "createdAt": entity.created_at,
        "updatedAt": entity.updated_at,
    }


def _song_rows(playlist_id: int, songs: Sequence[SongInput] | None) -> list[dict]:
    return [
        {
            "playlist_id": playlist_id,
            "position": position,
            "title": song["title"],
            "artist": song["artist"],
            "year": song["year"],
            "youtube_id": song[VIDEO_ID_FIELD],
        }
        for position, song in enumerate(canonical_songs(songs))
    ]


class SQLDatabaseManager:
    """Users, playlists and songs in three tables; multi-statement writes share one transaction."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine = None
        self._sessionmaker = None

    # -------------------------- lifecycle --------------------------
    async def init(self) -> None:
        try:
            self._engine = create_engine(self.url, echo=self.echo)
            self._sessionmaker = create_sessionmaker(self._engine)
            # Create-if-missing only; existing tables are left untouched.
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (ImportError, OSError, SQLAlchemyError) as exc:
            await self.close()
            raise StoreUnavailableError(f"SQL store unreachable: {exc}") from exc
        logger.info(f"[SQL] Connected ({self._engine.dialect.name}) and models ready")

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    def _session(self) -> AsyncSession:
        return self._sessionmaker()

    # -------------------------- helpers --------------------------
    @staticmethod
    async def _owner_id(session: AsyncSession, email: str) -> Optional[int]:
        stmt = select(User.id).where(User.email == email)
        return (await session.execute(stmt)).scalar_one_or_none()

    @staticmethod
    async def _insert_songs(session: AsyncSession, playlist_id: int, songs: Sequence[SongInput] | None) -> None:
        rows = _song_rows(playlist_id, songs)
        if rows:
            await session.execute(insert(Song), rows)

    @staticmethod
    async def _load_playlist(session: AsyncSession, playlist_id: int) -> Optional[Playlist]:
        stmt = select(Playlist).options(selectinload(Playlist.songs)).where(Playlist.id == playlist_id)
        return (await session.execute(stmt)).scalar_one_or_none()

    # -------------------------- users --------------------------
    async def get_user_by_id(self, user_id: Any) -> Optional[dict]:
        pk = _int_id(user_id)
        if pk is None:
            return None
        async with self._session() as session:
            user = await session.get(User, pk)
            return _user_to_dict(user) if user else None

    async def get_user_by_email(self, email: str) -> Optional[dict]:
        async with self._session() as session:
            stmt = select(User).where(User.email == email)
            user = (await session.execute(stmt)).scalar_one_or_none()
            return _user_to_dict(user) if user else None

    async def create_user(self, *, first_name: str, last_name: str, email: str, password_hash: str) -> dict:
        entity = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
        )
        async with self._session() as session:
            session.add(entity)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                if await self._owner_id(session, email) is not None:
                    raise DuplicateEmailError(email) from exc
                raise
            await session.refresh(entity)
            return _user_to_dict(entity)

    # -------------------------- playlists --------------------------
    async def create_playlist(self, *, name: str, songs: Sequence[SongInput], owner_email: str) -> dict:
        async with self._session() as session:
            owner_id = await self._owner_id(session, owner_email)
            if owner_id is None:
                raise OwnerNotFoundError(owner_email)
            await session.commit()
            try:
                async with session.begin():
                    playlist = Playlist(name=name, owner_email=owner_email, owner_user_id=owner_id)
                    session.add(playlist)
                    await session.flush()
                    playlist_id = playlist.id
                    await self._insert_songs(session, playlist_id, songs)
            except SQLAlchemyError:
                logger.exception(f"Rolled back creation of playlist {name!r} for {owner_email}")
                raise
        return await self.get_playlist_by_id(playlist_id)

    async def get_playlist_by_id(self, playlist_id: Any) -> Optional[dict]:
        pk = _int_id(playlist_id)
        if pk is None:
            return None
        async with self._session() as session:
            playlist = await self._load_playlist(session, pk)
            return _playlist_to_dict(playlist) if playlist else None

    async def get_playlist_pairs(self) -> list[dict]:
        stmt = select(Playlist.id, Playlist.name, Playlist.owner_email).order_by(Playlist.id.asc())
        async with self._session() as session:
            rows = (await session.execute(stmt)).all()
        return [{"_id": str(row.id), "name": row.name, "ownerEmail": row.owner_email} for row in rows]

    async def update_playlist_by_id(
        self,
        playlist_id: Any,
        *,
        name: str,
        owner_email: Optional[str],
        songs: Sequence[SongInput],
    ) -> Optional[dict]:
        pk = _int_id(playlist_id)
        if pk is None:
            return None
        async with self._session() as session:
            try:
                async with session.begin():
                    current = await session.get(Playlist, pk)
                    if current is None:
                        return None
                    values = {"name": name, "owner_email": owner_email}
                    if owner_email and owner_email != current.owner_email:
                        owner_id = await self._owner_id(session, owner_email)
                        if owner_id is None:
                            raise OwnerNotFoundError(owner_email)
                        values["owner_user_id"] = owner_id
                    await session.execute(update(Playlist).where(Playlist.id == pk).values(**values))
                    # Full replace: drop every song row, then insert the new list.
                    await session.execute(delete(Song).where(Song.playlist_id == pk))
                    await self._insert_songs(session, pk, songs)
            except SQLAlchemyError:
                logger.exception(f"Rolled back update of playlist {pk}")
                raise
        return await self.get_playlist_by_id(pk)

    async def delete_playlist_by_id(self, playlist_id: Any) -> bool:
        pk = _int_id(playlist_id)
        if pk is None:
            return False
        async with self._session() as session:
            result = await session.execute(delete(Playlist).where(Playlist.id == pk))
            await session.commit()
            return result.rowcount > 0
