from __future__ import annotations

from fastapi import APIRouter

from glassface_site.content.prerender import list_prerender_slugs
from glassface_site.web.core import runtime


router = APIRouter(prefix="/api")


@router.get("/health")
def health() -> dict:
    config = runtime.get_config()
    return {
        "ok": True,
        "env": config.env,
        "remote_enabled": config.remote_enabled,
        "dataset": config.sanity_dataset,
        "api_version": config.sanity_api_version,
        "prerender_slugs": sorted(list_prerender_slugs(runtime.get_snapshot())),
    }
