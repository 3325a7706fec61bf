from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

from glassface_site.core.models import Project

LOGGER = logging.getLogger(__name__)


def unique_by_slug(projects: Iterable[Project]) -> list[Project]:
    seen: set[str] = set()
    unique: list[Project] = []
    for project in projects:
        if not project.slug:
            continue
        if project.slug in seen:
            LOGGER.warning(
                "Duplicate project slug ignored. slug=%s id=%s",
                project.slug,
                project.id,
                extra={"event": "duplicate_slug", "slug": project.slug},
            )
            continue
        seen.add(project.slug)
        unique.append(project)
    return unique


def order_by_published_desc(projects: list[Project]) -> list[Project]:
    """Newest first; equal or missing timestamps keep their source order."""
    if len(projects) < 2:
        return list(projects)
    frame = pd.DataFrame(
        {
            "published": pd.to_datetime(
                [project.published_at for project in projects],
                utc=True,
                errors="coerce",
                format="ISO8601",
            )
        }
    )
    ordered = frame.sort_values("published", ascending=False, kind="mergesort", na_position="last")
    return [projects[int(position)] for position in ordered.index]
