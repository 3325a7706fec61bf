from __future__ import annotations

from typing import Any

from fastapi import Request

from glassface_site.core.defaults import SITE_TITLE


def page_title(title: str) -> str:
    title = str(title or "").strip()
    if not title or title == SITE_TITLE:
        return SITE_TITLE
    return f"{title} | {SITE_TITLE}"


def base_template_context(
    request: Request | None,
    title: str,
    active_nav: str,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    context: dict[str, Any] = {
        "request": request,
        "title": title,
        "page_title": page_title(title),
        "active_nav": active_nav,
    }
    if extra:
        context.update(extra)
    return context
