from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from glassface_site.web.http.errors import classify_exception, error_response, is_api_request, request_id_from_request
from glassface_site.web.routers.common import plan_not_found

LOGGER = logging.getLogger(__name__)


def _log_fields(request: Request, event: str) -> dict[str, str]:
    return {
        "event": event,
        "request_id": request_id_from_request(request),
        "method": request.method,
        "path": str(request.url.path),
    }


def _api_error(request: Request, exc: Exception):
    shape = classify_exception(exc)
    if shape.status_code >= 500:
        LOGGER.error(
            "API request failed. code=%s path=%s",
            shape.code,
            request.url.path,
            exc_info=exc,
            extra={**_log_fields(request, "api_error"), "error_code": shape.code},
        )
    return error_response(request, shape)


def register_exception_handlers(app: FastAPI, templates: Jinja2Templates) -> None:
    """JSON envelopes for ``/api/`` routes; HTML or plain text for pages."""

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException):
        if is_api_request(request):
            return _api_error(request, exc)
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        plan = plan_not_found(request)
        return templates.TemplateResponse(request, plan.template_name, plan.context, status_code=plan.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        if is_api_request(request):
            return _api_error(request, exc)
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception):
        if is_api_request(request):
            return _api_error(request, exc)
        LOGGER.error(
            "Unhandled page error. path=%s",
            request.url.path,
            exc_info=exc,
            extra=_log_fields(request, "unhandled_web_error"),
        )
        return PlainTextResponse("An unexpected error occurred.", status_code=500)
