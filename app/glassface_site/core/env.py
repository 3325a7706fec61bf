from __future__ import annotations

import os

TRUE_VALUES = {"1", "true", "yes", "y", "on"}

GFW_ENV = "GFW_ENV"
GFW_SANITY_PROJECT_ID = "GFW_SANITY_PROJECT_ID"
GFW_SANITY_DATASET = "GFW_SANITY_DATASET"
GFW_SANITY_API_VERSION = "GFW_SANITY_API_VERSION"
GFW_SANITY_USE_CDN = "GFW_SANITY_USE_CDN"
GFW_REMOTE_TIMEOUT_SEC = "GFW_REMOTE_TIMEOUT_SEC"
GFW_SNAPSHOT_PATH = "GFW_SNAPSHOT_PATH"
GFW_BASE_PATH = "GFW_BASE_PATH"

GFW_LOG_LEVEL = "GFW_LOG_LEVEL"
GFW_LOG_JSON = "GFW_LOG_JSON"
GFW_LOG_CAPTURE_ROOT = "GFW_LOG_CAPTURE_ROOT"

GFW_SECURITY_HEADERS_ENABLED = "GFW_SECURITY_HEADERS_ENABLED"
GFW_REQUEST_ID_HEADER_ENABLED = "GFW_REQUEST_ID_HEADER_ENABLED"
GFW_PERF_LOG_ENABLED = "GFW_PERF_LOG_ENABLED"
GFW_ERROR_INCLUDE_DETAILS = "GFW_ERROR_INCLUDE_DETAILS"

PORT = "PORT"


def get_env(name: str, default: str = "") -> str:
    return str(os.getenv(name, default)).strip()


def get_env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in TRUE_VALUES


def get_env_int(
    name: str,
    *,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    raw = get_env(name, "")
    try:
        value = int(raw) if raw else int(default)
    except ValueError:
        value = int(default)
    if min_value is not None:
        value = max(int(min_value), value)
    if max_value is not None:
        value = min(int(max_value), value)
    return value


def get_env_float(name: str, *, default: float, min_value: float | None = None) -> float:
    raw = get_env(name, "")
    try:
        value = float(raw) if raw else float(default)
    except ValueError:
        value = float(default)
    if min_value is not None:
        value = max(float(min_value), value)
    return value
