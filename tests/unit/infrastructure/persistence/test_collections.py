"""Tests for the SQLAlchemy document collections."""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from orbitcms.domain.entities import Page, Playlist, Track, new_id
from orbitcms.domain.exceptions import DuplicateKeyError
from orbitcms.domain.ports import QuerySpec, UpdateSpec
from orbitcms.infrastructure.persistence import (
    PageCollection,
    PlaylistCollection,
    TrackCollection,
)


def make_page(slug: str, **overrides) -> Page:
    fields = dict(
        title=slug.title(),
        description="d",
        image_url="https://example.com/i.png",
        thumbnail_url="https://example.com/t.png",
        slug=slug,
    )
    fields.update(overrides)
    return Page(**fields)


class TestTrackCount:
    async def test_insert_computes_count(self, playlists: PlaylistCollection) -> None:
        playlist = await playlists.insert(Playlist(title="P", tracks=["a", "b"], track_count=7))
        assert playlist.track_count == 2

    async def test_every_update_recomputes_count(self, playlists: PlaylistCollection) -> None:
        playlist = await playlists.insert(Playlist(title="P"))

        updated = await playlists.update_by_id(
            playlist.id, UpdateSpec(add_to_set={"tracks": ["a", "b", "a"]})
        )
        assert updated.tracks == ["a", "b"]
        assert updated.track_count == 2

        updated = await playlists.update_by_id(playlist.id, UpdateSpec(pull={"tracks": ["a"]}))
        assert updated.tracks == ["b"]
        assert updated.track_count == 1

        updated = await playlists.update_by_id(
            playlist.id, UpdateSpec(set={"track_count": 50, "title": "Q"})
        )
        assert updated.track_count == 1

    async def test_update_missing_returns_none(self, playlists: PlaylistCollection) -> None:
        assert await playlists.update_by_id(new_id(), UpdateSpec(set={"title": "x"})) is None


class TestQueries:
    async def test_find_by_ids_keeps_order_and_drops_missing(
        self, tracks: TrackCollection
    ) -> None:
        a = await tracks.insert(Track(title="A"))
        b = await tracks.insert(Track(title="B"))

        found = await tracks.find_by_ids([b.id, new_id(), a.id, b.id])

        assert [t.id for t in found] == [b.id, a.id]

    async def test_find_sorts_newest_first_and_windows(self, tracks: TrackCollection) -> None:
        for i in range(5):
            await tracks.insert(Track(title=f"T{i}"))
            await asyncio.sleep(0.001)

        window = await tracks.find(QuerySpec(skip=1, limit=2))

        assert [t.title for t in window] == ["T3", "T2"]
        assert await tracks.count(QuerySpec()) == 5

    async def test_search_is_case_insensitive_or_across_fields(
        self, tracks: TrackCollection
    ) -> None:
        await tracks.insert(Track(title="Kind of BLUE", category="jazz"))
        await tracks.insert(Track(title="Other", description="feeling blue", category="jazz"))
        await tracks.insert(Track(title="Blue Train", category="bebop"))
        await tracks.insert(Track(title="Giant Steps", category="jazz"))

        query = QuerySpec(
            equals={"category": "jazz"},
            search="blue",
            search_fields=("title", "description", "author", "category"),
        )

        assert sorted(t.title for t in await tracks.find(query)) == ["Kind of BLUE", "Other"]
        assert await tracks.count(query) == 2

    async def test_search_treats_wildcards_literally(self, tracks: TrackCollection) -> None:
        await tracks.insert(Track(title="100% pure"))
        await tracks.insert(Track(title="1000 pure"))

        found = await tracks.find(QuerySpec(search="100%", search_fields=("title",)))

        assert [t.title for t in found] == ["100% pure"]

    async def test_contains_matches_whole_members(self, playlists: PlaylistCollection) -> None:
        await playlists.insert(Playlist(title="Exact", tags=["jazz", "night"]))
        await playlists.insert(Playlist(title="Prefix", tags=["jazz-fusion"]))

        found = await playlists.find(QuerySpec(contains={"tags": "jazz"}))

        assert [p.title for p in found] == ["Exact"]

    async def test_exclude_fields_leaves_default(self, pages: PageCollection) -> None:
        await pages.insert(make_page("with-body", content="<p>long</p>"))

        [page] = await pages.find(QuerySpec(exclude_fields=("content",)))

        assert page.content == ""
        assert (await pages.find_by_id(page.id)).content == "<p>long</p>"

    async def test_unknown_field_is_rejected(self, tracks: TrackCollection) -> None:
        with pytest.raises(ValueError):
            await tracks.find(QuerySpec(equals={"nope": 1}))


class TestUniqueSlug:
    async def test_duplicate_slug_raises_duplicate_key(self, pages: PageCollection) -> None:
        await pages.insert(make_page("same"))

        with pytest.raises(DuplicateKeyError) as exc_info:
            await pages.insert(make_page("same"))

        assert exc_info.value.key == "slug"

    async def test_update_onto_taken_slug_raises(self, pages: PageCollection) -> None:
        await pages.insert(make_page("taken"))
        other = await pages.insert(make_page("free"))

        with pytest.raises(DuplicateKeyError):
            await pages.update_by_id(other.id, UpdateSpec(set={"slug": "taken"}))

    async def test_other_integrity_errors_are_not_duplicates(self, pages: PageCollection) -> None:
        page = await pages.insert(make_page("titled"))

        with pytest.raises(IntegrityError):
            await pages.update_by_id(page.id, UpdateSpec(set={"title": None}))

        assert (await pages.find_by_id(page.id)).title == "Titled"


async def test_empty_update_leaves_document_untouched(tracks: TrackCollection) -> None:
    track = await tracks.insert(Track(title="Still"))

    unchanged = await tracks.update_by_id(track.id, UpdateSpec())

    assert unchanged.title == "Still"
    assert unchanged.updated_at == track.updated_at


async def test_delete_returns_removed_document(tracks: TrackCollection) -> None:
    track = await tracks.insert(Track(title="Gone"))

    removed = await tracks.delete_by_id(track.id)

    assert removed.id == track.id
    assert await tracks.find_by_id(track.id) is None
    assert await tracks.delete_by_id(track.id) is None
