from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Request

from glassface_site.content.resolver import ContentResolver
from glassface_site.core.models import Page, Project
from glassface_site.web.core.template_context import base_template_context

HOME_TEMPLATE = "home.html"
PROJECT_TEMPLATE = "project.html"
PAGE_TEMPLATE = "page.html"
NOT_FOUND_TEMPLATE = "not_found.html"


@dataclass(frozen=True)
class RenderPlan:
    template_name: str
    context: dict[str, Any]
    status_code: int = 200


def plan_home(request: Request | None, resolver: ContentResolver) -> RenderPlan:
    projects = resolver.resolve_all_projects()
    featured_projects = [project for project in projects if project.featured]
    context = base_template_context(
        request=request,
        title="",
        active_nav="home",
        extra={
            "projects": projects,
            "featured_projects": featured_projects,
        },
    )
    return RenderPlan(HOME_TEMPLATE, context)


def plan_slug(request: Request | None, resolver: ContentResolver, slug: str) -> RenderPlan | None:
    resolved = resolver.resolve_by_slug(slug)
    if isinstance(resolved, Project):
        context = base_template_context(
            request=request,
            title=resolved.title,
            active_nav="projects",
            extra={"project": resolved},
        )
        return RenderPlan(PROJECT_TEMPLATE, context)
    if isinstance(resolved, Page):
        context = base_template_context(
            request=request,
            title=resolved.title,
            active_nav=resolved.slug,
            extra={"page": resolved},
        )
        return RenderPlan(PAGE_TEMPLATE, context)
    return None


def plan_not_found(request: Request | None, slug: str = "") -> RenderPlan:
    context = base_template_context(
        request=request,
        title="Not found",
        active_nav="",
        extra={"slug": slug},
    )
    return RenderPlan(NOT_FOUND_TEMPLATE, context, status_code=404)
