"""Canonical playlist/song/pair shapes shared by both stores.

Adapters hand back store-native records (``_id`` ObjectIds from the
document store, integer ``id`` columns from the relational one). Everything
leaving the data-access boundary goes through these helpers first.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

# Both spellings are accepted on input; output always uses the first.
VIDEO_ID_FIELD = "youTubeId"
VIDEO_ID_ALIASES = (VIDEO_ID_FIELD, "youtubeId")


def _video_id(song: Mapping[str, Any]) -> Optional[str]:
    for field in VIDEO_ID_ALIASES:
        value = song.get(field)
        if value is not None:
            return value
    return None


def canonical_song(raw: Mapping[str, Any] | None) -> dict:
    """Map any accepted song spelling onto {title, artist, year, youTubeId}."""
    if not raw:
        return {"title": "", "artist": "", "year": None, VIDEO_ID_FIELD: None}
    return {
        "title": raw.get("title"),
        "artist": raw.get("artist"),
        "year": raw.get("year"),
        VIDEO_ID_FIELD: _video_id(raw),
    }


def canonical_songs(songs: Iterable[Mapping[str, Any] | None] | None) -> list[dict]:
    return [canonical_song(song) for song in (songs or [])]


def entity_id(raw: Mapping[str, Any] | None) -> Optional[str]:
    """String identifier of a user/playlist record from either store."""
    if not raw:
        return None
    value = raw.get("_id")
    if value is None:
        value = raw.get("id")
    return None if value is None else str(value)


def normalize_playlist(raw: Mapping[str, Any] | None) -> Optional[dict]:
    if not raw:
        return None
    songs = raw.get("songs")
    if songs is None:
        songs = raw.get("Songs")
    return {
        "_id": entity_id(raw),
        "name": raw.get("name"),
        "ownerEmail": raw.get("ownerEmail"),
        "songs": canonical_songs(songs),
    }


def normalize_pairs(pairs: Iterable[Mapping[str, Any]] | None) -> list[dict]:
    return [
        {
            "_id": entity_id(pair),
            "name": pair.get("name"),
            "ownerEmail": pair.get("ownerEmail"),
        }
        for pair in (pairs or [])
    ]
