from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from glassface_site.core.content_errors import ContentSourceError, SnapshotReadError
from glassface_site.core.env import GFW_ERROR_INCLUDE_DETAILS, get_env_bool

ERROR_CODE_VALIDATION = "VALIDATION_ERROR"
ERROR_CODE_BAD_REQUEST = "BAD_REQUEST"
ERROR_CODE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
ERROR_CODE_CONTENT_SOURCE = "CONTENT_SOURCE_ERROR"
ERROR_CODE_SNAPSHOT = "SNAPSHOT_ERROR"
ERROR_CODE_INTERNAL = "INTERNAL_SERVER_ERROR"


@dataclass(frozen=True)
class ErrorShape:
    """Status, code and user-facing message for one failure kind."""

    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


_CONTENT_ERROR_SHAPES: dict[type[Exception], ErrorShape] = {
    ContentSourceError: ErrorShape(503, ERROR_CODE_CONTENT_SOURCE, "Content source is unavailable. Please try again shortly."),
    SnapshotReadError: ErrorShape(500, ERROR_CODE_SNAPSHOT, "Local content snapshot could not be read."),
}

_HTTP_STATUS_CODES = {
    400: ERROR_CODE_BAD_REQUEST,
    404: ERROR_CODE_NOT_FOUND,
    405: ERROR_CODE_METHOD_NOT_ALLOWED,
}


def is_api_request(request: Request) -> bool:
    """True for JSON endpoints; the matched route wins over the raw path.

    Behind a base-path proxy the raw path carries the prefix, so the route
    template is checked first.
    """
    route_path = str(getattr(request.scope.get("route"), "path", "") or "")
    return (route_path or str(request.url.path or "")).startswith("/api/")


def request_id_from_request(request: Request) -> str:
    request_id = str(getattr(request.state, "request_id", "") or "").strip()
    return request_id or str(request.headers.get("x-request-id", "")).strip() or "-"


def error_payload(shape: ErrorShape, request_id: str) -> dict[str, Any]:
    error: dict[str, Any] = {"code": shape.code, "message": shape.message}
    if shape.details and get_env_bool(GFW_ERROR_INCLUDE_DETAILS, default=False):
        error["details"] = shape.details
    return {
        "ok": False,
        "error": error,
        "request_id": request_id or "-",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def error_response(request: Request, shape: ErrorShape) -> JSONResponse:
    request_id = request_id_from_request(request)
    return JSONResponse(
        error_payload(shape, request_id),
        status_code=shape.status_code,
        headers={"X-Request-ID": request_id},
    )


def classify_exception(exc: Exception) -> ErrorShape:
    for error_type, shape in _CONTENT_ERROR_SHAPES.items():
        if isinstance(exc, error_type):
            return ErrorShape(shape.status_code, shape.code, shape.message, {"reason": str(exc)})

    if isinstance(exc, RequestValidationError):
        return ErrorShape(
            422,
            ERROR_CODE_VALIDATION,
            "Request validation failed. Check the request and try again.",
            {"errors": exc.errors()},
        )

    if isinstance(exc, StarletteHTTPException):
        status_code = int(exc.status_code)
        fallback_code = ERROR_CODE_BAD_REQUEST if status_code < 500 else ERROR_CODE_INTERNAL
        return ErrorShape(status_code, _HTTP_STATUS_CODES.get(status_code, fallback_code), str(exc.detail or "Request failed."))

    return ErrorShape(500, ERROR_CODE_INTERNAL, "An unexpected error occurred.", {"reason": str(exc)})
