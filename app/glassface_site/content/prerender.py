from __future__ import annotations

import logging

from glassface_site.core.content_errors import SnapshotReadError
from glassface_site.core.defaults import PRERENDER_FIXED_SLUGS
from glassface_site.core.models import slug_of
from glassface_site.infrastructure.snapshot import LocalSnapshot

LOGGER = logging.getLogger(__name__)


def list_prerender_slugs(snapshot: LocalSnapshot) -> set[str]:
    """Slugs to materialize ahead of time.

    Only the local snapshot is consulted so build output does not depend on
    the remote source being reachable.
    """
    slugs = set(PRERENDER_FIXED_SLUGS)
    try:
        documents = snapshot.read_documents()
    except SnapshotReadError as exc:
        LOGGER.warning(
            "Local snapshot unavailable for pre-rendering. error=%s",
            exc,
            extra={"event": "snapshot_read_failed", "path": str(snapshot.path)},
        )
        return slugs
    slugs.update(slug for slug in (slug_of(document) for document in documents) if slug)
    return slugs
