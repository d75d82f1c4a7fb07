"""
Document Schemas

MongoDB collection schemas as Pydantic models. Documents are validated
through these models before insert/update so the document store enforces
the same required fields as the relational tables.

- UserDocument -> "users" collection
- PlaylistDocument -> "playlists" collection (songs embedded)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field

USERS_COLLECTION = "users"
PLAYLISTS_COLLECTION = "playlists"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SongDocument(BaseModel):
    """Embedded song; has no identity outside its playlist."""

    title: str = Field(..., description="Song title")
    artist: str = Field(..., description="Artist name")
    year: Optional[int] = Field(None, description="Release year")
    youTubeId: Optional[str] = Field(None, description="External video identifier")


class UserDocument(BaseModel):
    firstName: str = Field(..., description="First name")
    lastName: str = Field(..., description="Last name")
    email: str = Field(..., description="Unique e-mail, case-sensitive as stored")
    passwordHash: str = Field(..., description="Opaque password hash")
    playlists: List[Any] = Field(default_factory=list, description="Legacy playlist references")
    createdAt: datetime = Field(default_factory=_now)
    updatedAt: datetime = Field(default_factory=_now)


class PlaylistDocument(BaseModel):
    name: str = Field(..., description="Playlist name")
    ownerEmail: Optional[str] = Field(None, description="E-mail of the owning user")
    songs: List[SongDocument] = Field(default_factory=list)
    createdAt: datetime = Field(default_factory=_now)
    updatedAt: datetime = Field(default_factory=_now)
