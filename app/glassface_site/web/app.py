from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from glassface_site.core.defaults import SITE_TITLE
from glassface_site.infrastructure.logging import setup_app_logging
from glassface_site.web.core import runtime
from glassface_site.web.core.templating import STATIC_DIR, build_templates
from glassface_site.web.http.exception_handlers import register_exception_handlers
from glassface_site.web.routers import router as web_router
from glassface_site.web.system.settings import AppRuntimeSettings

LOGGER = logging.getLogger(__name__)
PERF_LOGGER = logging.getLogger("glassface_site.perf")

REQUEST_ID_LENGTH = 12


def _route_path_label(request: Request) -> str:
    route_path = str(getattr(request.scope.get("route"), "path", "") or "").strip()
    return route_path or str(request.url.path or "/")


@asynccontextmanager
async def _app_lifespan(_app: FastAPI):
    config = runtime.get_config()
    LOGGER.info(
        "Site starting. env=%s remote_enabled=%s snapshot=%s",
        config.env,
        str(config.remote_enabled).lower(),
        config.snapshot_path,
        extra={
            "event": "site_startup",
            "env": config.env,
            "remote_enabled": config.remote_enabled,
            "dataset": config.sanity_dataset,
            "snapshot_path": config.snapshot_path,
            "base_path": config.base_path,
        },
    )
    yield
    runtime.reset_runtime()


def _install_security_headers(app: FastAPI, settings: AppRuntimeSettings) -> None:
    static_headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    if settings.csp_policy:
        static_headers["Content-Security-Policy"] = settings.csp_policy

    @app.middleware("http")
    async def _security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in static_headers.items():
            response.headers.setdefault(name, value)
        return response


def _install_request_context(app: FastAPI, settings: AppRuntimeSettings) -> None:
    @app.middleware("http")
    async def _request_context(request: Request, call_next):
        request_id = uuid.uuid4().hex[:REQUEST_ID_LENGTH]
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        if settings.perf_log_enabled:
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            route_path = _route_path_label(request)
            PERF_LOGGER.info(
                "request_perf id=%s %s %s -> %s in %.2fms",
                request_id,
                request.method,
                route_path,
                response.status_code,
                elapsed_ms,
                extra={
                    "event": "request_perf",
                    "request_id": request_id,
                    "method": request.method,
                    "path": route_path,
                    "status_code": response.status_code,
                    "total_ms": elapsed_ms,
                },
            )
        if settings.request_id_header_enabled:
            response.headers["X-Request-ID"] = request_id
        return response


def create_app() -> FastAPI:
    setup_app_logging()
    config = runtime.get_config()
    settings = AppRuntimeSettings.from_env()

    app = FastAPI(title=SITE_TITLE, lifespan=_app_lifespan)
    templates = build_templates(config, runtime.get_image_urls())
    app.state.templates = templates

    if settings.security_headers_enabled:
        _install_security_headers(app, settings)
    # Registered last so it wraps the security headers middleware.
    _install_request_context(app, settings)
    register_exception_handlers(app, templates)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(web_router)
    return app


app = create_app()
