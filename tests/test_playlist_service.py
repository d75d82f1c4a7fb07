from __future__ import annotations

import pytest

from playlister.domain.playlists import entity_id
from playlister.services.playlist_service import (
    NotOwnerError,
    PlaylistNotFoundError,
    PlaylistService,
    UnauthorizedError,
    ValidationError,
)

SONGS = [
    {"title": "Song A", "artist": "Artist A", "year": 2001, "youTubeId": "AAA111"},
    {"title": "Song B", "artist": "Artist B", "youtubeId": "BBB222"},
]


@pytest.fixture()
def service(db) -> PlaylistService:
    return PlaylistService(db)


@pytest.fixture()
async def joe_id(joe) -> str:
    return entity_id(joe)


@pytest.fixture()
async def ann_id(db, password_hash) -> str:
    ann = await db.create_user(first_name="Ann", last_name="Other", email="ann@example.com", password_hash=password_hash)
    return entity_id(ann)


async def test_create_defaults_owner_to_caller(service, joe_id):
    playlist = await service.create_playlist(joe_id, "Mine", SONGS)
    assert playlist["ownerEmail"] == "joe@shmo.com"
    assert isinstance(playlist["_id"], str)
    assert playlist["songs"][1] == {"title": "Song B", "artist": "Artist B", "year": None, "youTubeId": "BBB222"}


async def test_create_requires_name(service, joe_id):
    with pytest.raises(ValidationError):
        await service.create_playlist(joe_id, "", SONGS)


async def test_unknown_caller_is_unauthorized(service):
    with pytest.raises(UnauthorizedError):
        await service.create_playlist("missing", "Nope", [])
    with pytest.raises(UnauthorizedError):
        await service.list_playlists("missing")


async def test_owner_can_read_playlist(service, joe_id):
    created = await service.create_playlist(joe_id, "Mine", SONGS)
    fetched = await service.get_playlist(joe_id, created["_id"])
    assert fetched == created


async def test_other_user_cannot_read_update_or_delete(service, joe_id, ann_id):
    created = await service.create_playlist(joe_id, "Private", SONGS)
    with pytest.raises(NotOwnerError):
        await service.get_playlist(ann_id, created["_id"])
    with pytest.raises(NotOwnerError):
        await service.update_playlist(ann_id, created["_id"], name="Stolen")
    with pytest.raises(NotOwnerError):
        await service.delete_playlist(ann_id, created["_id"])

    still_there = await service.get_playlist(joe_id, created["_id"])
    assert still_there["name"] == "Private"


async def test_pairs_are_filtered_by_caller(service, joe_id, ann_id):
    await service.create_playlist(joe_id, "Joe 1", [])
    await service.create_playlist(joe_id, "Joe 2", [])
    await service.create_playlist(ann_id, "Ann 1", [])

    joe_pairs = await service.get_playlist_pairs(joe_id)
    assert sorted(pair["name"] for pair in joe_pairs) == ["Joe 1", "Joe 2"]
    assert all(isinstance(pair["_id"], str) for pair in joe_pairs)
    assert await service.get_playlist_pairs("missing") == []


async def test_list_playlists_returns_everything_normalized(service, joe_id, ann_id):
    await service.create_playlist(joe_id, "Joe 1", SONGS)
    await service.create_playlist(ann_id, "Ann 1", [])

    playlists = await service.list_playlists(joe_id)
    assert sorted(p["name"] for p in playlists) == ["Ann 1", "Joe 1"]
    assert all(set(p) == {"_id", "name", "ownerEmail", "songs"} for p in playlists)


async def test_update_keeps_name_when_omitted_and_replaces_songs(service, joe_id):
    created = await service.create_playlist(joe_id, "Keep Name", SONGS)
    updated = await service.update_playlist(joe_id, created["_id"], songs=[{"title": "Solo", "artist": "One"}])
    assert updated["name"] == "Keep Name"
    assert updated["ownerEmail"] == "joe@shmo.com"
    assert updated["songs"] == [{"title": "Solo", "artist": "One", "year": None, "youTubeId": None}]

    emptied = await service.update_playlist(joe_id, created["_id"], name="Renamed")
    assert emptied["name"] == "Renamed"
    assert emptied["songs"] == []


async def test_delete_then_read_is_not_found(service, joe_id):
    created = await service.create_playlist(joe_id, "Bye", SONGS)
    await service.delete_playlist(joe_id, created["_id"])
    with pytest.raises(PlaylistNotFoundError):
        await service.get_playlist(joe_id, created["_id"])
    with pytest.raises(PlaylistNotFoundError):
        await service.delete_playlist(joe_id, created["_id"])
