from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from glassface_site.content.ordering import order_by_published_desc, unique_by_slug
from glassface_site.content.queries import PAGE_QUERY, PROJECT_QUERY, PROJECTS_QUERY
from glassface_site.core.content_errors import ContentSourceError, SnapshotReadError
from glassface_site.core.models import Page, Project, slug_of
from glassface_site.infrastructure.snapshot import LocalSnapshot

LOGGER = logging.getLogger(__name__)


class RemoteContentSource(Protocol):
    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any: ...


class ContentResolver:
    """Resolves projects and pages, remote source first, local snapshot second.

    The order is a plain priority chain. Every call goes to the remote source
    again; nothing is memoized and results of the two sources are never merged.
    Slug lookups fall back to the snapshot for projects only. Pages exist only
    in the remote source.
    """

    def __init__(self, *, remote: RemoteContentSource | None, snapshot: LocalSnapshot) -> None:
        self.remote = remote
        self.snapshot = snapshot

    def resolve_all_projects(self) -> list[Project]:
        documents = self._fetch_remote(PROJECTS_QUERY)
        if isinstance(documents, list) and documents:
            projects = self._to_projects(documents)
            if projects:
                return order_by_published_desc(projects)
        if documents is not None:
            LOGGER.warning(
                "Remote project listing is empty, using local snapshot.",
                extra={"event": "remote_listing_empty"},
            )
        return order_by_published_desc(self._to_projects(self._snapshot_documents()))

    def resolve_project(self, slug: str) -> Project | None:
        document = self._fetch_remote(PROJECT_QUERY, {"slug": slug})
        if isinstance(document, Mapping):
            return Project.from_document(document)

        for candidate in self._snapshot_documents():
            if slug_of(candidate) == slug:
                LOGGER.warning(
                    "Project resolved from local snapshot. slug=%s",
                    slug,
                    extra={"event": "snapshot_fallback", "slug": slug},
                )
                return Project.from_document(candidate)
        return None

    def resolve_page(self, slug: str) -> Page | None:
        document = self._fetch_remote(PAGE_QUERY, {"slug": slug})
        if isinstance(document, Mapping):
            return Page.from_document(document)
        return None

    def resolve_by_slug(self, slug: str) -> Project | Page | None:
        project = self.resolve_project(slug)
        if project is not None:
            return project
        return self.resolve_page(slug)

    def _fetch_remote(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        """Run one remote query; ``None`` means failed, unconfigured, or no match."""
        if self.remote is None:
            return None
        try:
            return self.remote.fetch(query, params)
        except Exception as exc:
            # Any remote failure degrades to the snapshot; nothing reaches the caller.
            LOGGER.warning(
                "Remote content fetch failed. params=%s error=%s",
                dict(params or {}),
                exc,
                exc_info=not isinstance(exc, ContentSourceError),
                extra={"event": "remote_fetch_failed", "params": dict(params or {})},
            )
            return None

    def _snapshot_documents(self) -> list[dict[str, Any]]:
        try:
            return self.snapshot.read_documents()
        except SnapshotReadError as exc:
            LOGGER.warning(
                "Local snapshot unavailable. error=%s",
                exc,
                extra={"event": "snapshot_read_failed", "path": str(self.snapshot.path)},
            )
            return []

    @staticmethod
    def _to_projects(documents: list[Any]) -> list[Project]:
        return unique_by_slug(
            Project.from_document(document)
            for document in documents
            if isinstance(document, Mapping) and slug_of(document)
        )
