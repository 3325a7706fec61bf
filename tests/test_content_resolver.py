from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping

import pytest

APP_ROOT = Path(__file__).resolve().parents[1] / "app"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from glassface_site.content.queries import PAGE_QUERY, PROJECT_QUERY, PROJECTS_QUERY  # noqa: E402
from glassface_site.content.resolver import ContentResolver  # noqa: E402
from glassface_site.core.content_errors import ContentSourceError  # noqa: E402
from glassface_site.core.models import Page, Project  # noqa: E402
from glassface_site.infrastructure.snapshot import LocalSnapshot  # noqa: E402


class _UnreachableRemote:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append((query, dict(params or {})))
        raise ContentSourceError("connection refused")


class _FixedResultRemote:
    """Answers every query with the same raw result."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[str] = []

    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append(query)
        return self.result


class _BrokenRemote:
    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        raise RuntimeError("client bug")


class _StaticRemote:
    def __init__(
        self,
        *,
        listing: list[dict[str, Any]] | None = None,
        projects: dict[str, dict[str, Any]] | None = None,
        pages: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.listing = listing if listing is not None else []
        self.projects = projects or {}
        self.pages = pages or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        params = dict(params or {})
        self.calls.append((query, params))
        if query == PROJECTS_QUERY:
            return self.listing
        if query == PROJECT_QUERY:
            return self.projects.get(params["slug"])
        if query == PAGE_QUERY:
            return self.pages.get(params["slug"])
        raise AssertionError(f"unexpected query {query!r}")


def _doc(slug: str, title: str, published_at: str | None = None, **extra: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "_id": f"project-{slug}",
        "_type": "project",
        "title": title,
        "slug": {"_type": "slug", "current": slug},
    }
    if published_at is not None:
        document["publishedAt"] = published_at
    document.update(extra)
    return document


@pytest.fixture()
def resolver_log():
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger = logging.getLogger("glassface_site.content.resolver")
    handler = _Collect(level=logging.DEBUG)
    logger.addHandler(handler)
    yield records
    logger.removeHandler(handler)


SNAPSHOT_DOCUMENTS = [
    _doc(
        "song-a",
        "Song A",
        "2024-01-01",
        featured=True,
        category="music",
        artist="Face",
        description="First single.",
        featuredImage={"_type": "image", "asset": {"_ref": "image-abc123-1200x800-jpg"}},
        gallery=[{"_type": "image", "asset": {"_ref": "image-def456-600x400-png"}}],
        externalUrl="https://example.com/song-a",
    ),
    _doc("poster-b", "Poster B", "2024-06-15T10:00:00Z", category="visual-art"),
    _doc("film-c", "Film C"),
]


def test_example_snapshot_with_unreachable_remote(song_a_snapshot: Path) -> None:
    resolver = ContentResolver(remote=_UnreachableRemote(), snapshot=LocalSnapshot(song_a_snapshot))

    projects = resolver.resolve_all_projects()
    assert [project.title for project in projects] == ["Song A"]

    resolved = resolver.resolve_by_slug("song-a")
    assert resolved == projects[0]
    assert isinstance(resolved, Project)
    assert resolved.featured is True
    assert resolved.published_at == "2024-01-01"

    assert resolver.resolve_by_slug("song-b") is None


@pytest.mark.parametrize("document", SNAPSHOT_DOCUMENTS, ids=lambda doc: doc["slug"]["current"])
def test_snapshot_slugs_resolve_to_stored_fields_when_remote_is_down(write_snapshot, document) -> None:
    resolver = ContentResolver(
        remote=_UnreachableRemote(),
        snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)),
    )

    resolved = resolver.resolve_by_slug(document["slug"]["current"])

    assert isinstance(resolved, Project)
    assert resolved == Project.from_document(document)
    assert resolved.id == document["_id"]
    assert resolved.title == document["title"]
    assert resolved.published_at == document.get("publishedAt")
    assert resolved.external_url == document.get("externalUrl")


def test_snapshot_project_keeps_optional_fields(write_snapshot) -> None:
    resolver = ContentResolver(remote=None, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    project = resolver.resolve_project("song-a")

    assert project is not None
    assert project.category == "music"
    assert project.artist == "Face"
    assert project.description == "First single."
    assert project.featured_image == {"_type": "image", "asset": {"_ref": "image-abc123-1200x800-jpg"}}
    assert project.gallery == ({"_type": "image", "asset": {"_ref": "image-def456-600x400-png"}},)


def test_listing_is_ordered_newest_first_with_ties_in_source_order(write_snapshot) -> None:
    documents = [
        _doc("old", "Old", "2023-05-01"),
        _doc("undated", "Undated"),
        _doc("tie-first", "Tie First", "2024-02-01T00:00:00Z"),
        _doc("newest", "Newest", "2025-01-01"),
        _doc("tie-second", "Tie Second", "2024-02-01"),
    ]
    resolver = ContentResolver(remote=_UnreachableRemote(), snapshot=LocalSnapshot(write_snapshot(documents)))

    projects = resolver.resolve_all_projects()

    assert [project.slug for project in projects] == ["newest", "tie-first", "tie-second", "old", "undated"]


def test_remote_listing_is_reordered_by_published_date(tmp_path: Path) -> None:
    remote = _StaticRemote(
        listing=[
            _doc("a", "A", "2022-01-01"),
            _doc("b", "B", "2024-01-01"),
        ]
    )
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(tmp_path / "missing.json"))

    assert [project.slug for project in resolver.resolve_all_projects()] == ["b", "a"]


def test_empty_remote_listing_falls_back_to_snapshot(write_snapshot) -> None:
    remote = _StaticRemote(listing=[])
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    projects = resolver.resolve_all_projects()

    assert projects
    assert {project.slug for project in projects} == {"song-a", "poster-b", "film-c"}
    assert remote.calls == [(PROJECTS_QUERY, {})]


def test_non_empty_remote_listing_wins_over_snapshot(write_snapshot) -> None:
    remote = _StaticRemote(listing=[_doc("remote-only", "Remote Only", "2025-01-01")])
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    assert [project.slug for project in resolver.resolve_all_projects()] == ["remote-only"]


@pytest.mark.parametrize(
    "result",
    [
        None,
        {"slug": {"current": "remote-only"}},
        [{"title": "No slug"}],
        ["song-a", 7, None],
    ],
)
def test_unusable_remote_listing_falls_back_to_snapshot(write_snapshot, result: Any) -> None:
    remote = _FixedResultRemote(result)
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    projects = resolver.resolve_all_projects()

    assert [project.slug for project in projects] == ["poster-b", "song-a", "film-c"]
    assert remote.calls == [PROJECTS_QUERY]


@pytest.mark.parametrize("result", [["song-a"], "song-a", 0])
def test_non_mapping_remote_project_falls_back_to_snapshot(write_snapshot, result: Any) -> None:
    resolver = ContentResolver(
        remote=_FixedResultRemote(result),
        snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)),
    )

    resolved = resolver.resolve_by_slug("song-a")

    assert isinstance(resolved, Project)
    assert resolved.title == "Song A"
    assert resolver.resolve_page("about") is None


def test_unexpected_remote_error_falls_back_to_snapshot(song_a_snapshot: Path) -> None:
    resolver = ContentResolver(remote=_BrokenRemote(), snapshot=LocalSnapshot(song_a_snapshot))

    assert [project.slug for project in resolver.resolve_all_projects()] == ["song-a"]
    assert isinstance(resolver.resolve_by_slug("song-a"), Project)
    assert resolver.resolve_by_slug("about") is None


def test_fallbacks_are_logged_as_warnings(resolver_log: list[logging.LogRecord], song_a_snapshot: Path) -> None:
    resolver = ContentResolver(remote=_FixedResultRemote([]), snapshot=LocalSnapshot(song_a_snapshot))
    resolver.resolve_all_projects()
    resolver.resolve_project("song-a")

    events = {getattr(record, "event", ""): record.levelno for record in resolver_log}
    assert events["remote_listing_empty"] == logging.WARNING
    assert events["snapshot_fallback"] == logging.WARNING


def test_listing_skips_documents_without_slug_and_duplicates(write_snapshot) -> None:
    documents = [
        _doc("dup", "First", "2024-01-01"),
        {"_id": "no-slug", "title": "No Slug"},
        {"_id": "blank-slug", "title": "Blank", "slug": {"current": ""}},
        _doc("dup", "Second", "2024-01-01"),
    ]
    resolver = ContentResolver(remote=None, snapshot=LocalSnapshot(write_snapshot(documents)))

    projects = resolver.resolve_all_projects()

    assert [(project.slug, project.title) for project in projects] == [("dup", "First")]


def test_missing_slug_is_not_found_in_both_sources(write_snapshot) -> None:
    remote = _StaticRemote(pages={"about": {"_id": "page-about", "title": "About", "slug": {"current": "about"}}})
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    assert resolver.resolve_by_slug("__missing__") is None


def test_remote_project_is_preferred_over_snapshot(write_snapshot) -> None:
    remote = _StaticRemote(projects={"song-a": _doc("song-a", "Song A (remote)", "2024-01-01")})
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    resolved = resolver.resolve_by_slug("song-a")

    assert isinstance(resolved, Project)
    assert resolved.title == "Song A (remote)"
    assert [query for query, _params in remote.calls] == [PROJECT_QUERY]


def test_snapshot_project_is_tried_before_remote_page(write_snapshot) -> None:
    remote = _StaticRemote(pages={"song-a": {"_id": "page-song-a", "title": "Song A page", "slug": {"current": "song-a"}}})
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(write_snapshot(SNAPSHOT_DOCUMENTS)))

    resolved = resolver.resolve_by_slug("song-a")

    assert isinstance(resolved, Project)
    assert [query for query, _params in remote.calls] == [PROJECT_QUERY]


def test_page_is_resolved_from_remote_after_project_miss(tmp_path: Path) -> None:
    content = [{"_type": "block", "style": "normal", "children": [{"_type": "span", "text": "Hello"}]}]
    remote = _StaticRemote(
        pages={"about": {"_id": "page-about", "title": "About", "slug": {"current": "about"}, "content": content}}
    )
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(tmp_path / "missing.json"))

    resolved = resolver.resolve_by_slug("about")

    assert isinstance(resolved, Page)
    assert resolved.title == "About"
    assert resolved.content == tuple(content)
    assert [query for query, _params in remote.calls] == [PROJECT_QUERY, PAGE_QUERY]
    assert remote.calls[0][1] == {"slug": "about"}


def test_pages_have_no_snapshot_fallback(write_snapshot) -> None:
    snapshot = write_snapshot([{"_id": "page-about", "_type": "page", "title": "About", "slug": {"current": "other"}}])
    resolver = ContentResolver(remote=_UnreachableRemote(), snapshot=LocalSnapshot(snapshot))

    assert resolver.resolve_page("about") is None
    assert resolver.resolve_by_slug("about") is None


def test_every_call_queries_the_remote_again(song_a_snapshot: Path) -> None:
    remote = _UnreachableRemote()
    resolver = ContentResolver(remote=remote, snapshot=LocalSnapshot(song_a_snapshot))

    resolver.resolve_all_projects()
    resolver.resolve_all_projects()
    resolver.resolve_by_slug("song-a")

    assert [query for query, _params in remote.calls] == [PROJECTS_QUERY, PROJECTS_QUERY, PROJECT_QUERY]


@pytest.mark.parametrize(
    "raw_bytes",
    [
        b"{not json",
        b'{"slug": {"current": "x"}}',
        b"",
        b'[{"slug": {"current": "caf\xe9"}, "title": "x"}]',
    ],
)
def test_unreadable_snapshot_is_treated_as_empty(tmp_path: Path, raw_bytes: bytes) -> None:
    path = tmp_path / "projects.json"
    path.write_bytes(raw_bytes)
    resolver = ContentResolver(remote=_UnreachableRemote(), snapshot=LocalSnapshot(path))

    assert resolver.resolve_all_projects() == []
    assert resolver.resolve_by_slug("x") is None


def test_missing_snapshot_with_unreachable_remote_is_empty(tmp_path: Path) -> None:
    resolver = ContentResolver(remote=_UnreachableRemote(), snapshot=LocalSnapshot(tmp_path / "missing.json"))

    assert resolver.resolve_all_projects() == []
    assert resolver.resolve_by_slug("song-a") is None


def test_disabled_remote_reads_snapshot_only(song_a_snapshot: Path) -> None:
    resolver = ContentResolver(remote=None, snapshot=LocalSnapshot(song_a_snapshot))

    assert [project.slug for project in resolver.resolve_all_projects()] == ["song-a"]
    assert resolver.resolve_page("about") is None
