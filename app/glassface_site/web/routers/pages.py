from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from glassface_site.web.core import runtime
from glassface_site.web.routers.common import RenderPlan, plan_home, plan_not_found, plan_slug


router = APIRouter()
LOGGER = logging.getLogger(__name__)


def _render(request: Request, plan: RenderPlan):
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        plan.template_name,
        plan.context,
        status_code=plan.status_code,
    )


@router.get("/")
def home(request: Request):
    return _render(request, plan_home(request, runtime.get_resolver()))


@router.get("/{slug}")
def slug_page(request: Request, slug: str):
    plan = plan_slug(request, runtime.get_resolver(), slug)
    if plan is None:
        LOGGER.info(
            "No project or page for slug. slug=%s",
            slug,
            extra={"event": "slug_not_found", "slug": slug},
        )
        plan = plan_not_found(request, slug)
    return _render(request, plan)
