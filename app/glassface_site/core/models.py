from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def slug_of(document: Mapping[str, Any] | None) -> str:
    """Return ``slug.current`` of a content document, or "" when undefined."""
    if not isinstance(document, Mapping):
        return ""
    raw_slug = document.get("slug")
    if isinstance(raw_slug, Mapping):
        raw_slug = raw_slug.get("current")
    if not isinstance(raw_slug, str):
        return ""
    return raw_slug.strip()


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    slug: str
    description: str | None = None
    category: str | None = None
    artist: str | None = None
    featured: bool = False
    published_at: str | None = None
    featured_image: Mapping[str, Any] | None = None
    gallery: tuple[Any, ...] = field(default_factory=tuple)
    external_url: str | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Project":
        gallery = document.get("gallery") or ()
        if not isinstance(gallery, (list, tuple)):
            gallery = ()
        featured_image = document.get("featuredImage")
        return cls(
            id=str(document.get("_id") or ""),
            title=str(document.get("title") or ""),
            slug=slug_of(document),
            description=_optional_text(document.get("description")),
            category=_optional_text(document.get("category")),
            artist=_optional_text(document.get("artist")),
            featured=document.get("featured") is True,
            published_at=_optional_text(document.get("publishedAt")),
            featured_image=featured_image if featured_image else None,
            gallery=tuple(item for item in gallery if item),
            external_url=_optional_text(document.get("externalUrl")),
        )


@dataclass(frozen=True)
class Page:
    id: str
    title: str
    slug: str
    content: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Page":
        content = document.get("content") or ()
        if isinstance(content, Mapping):
            content = (content,)
        if not isinstance(content, (list, tuple)):
            content = ()
        return cls(
            id=str(document.get("_id") or ""),
            title=str(document.get("title") or ""),
            slug=slug_of(document),
            content=tuple(block for block in content if isinstance(block, Mapping)),
        )
