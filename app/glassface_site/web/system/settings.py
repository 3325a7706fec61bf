from __future__ import annotations

from dataclasses import dataclass

from glassface_site.core.defaults import DEFAULT_CSP_POLICY
from glassface_site.core.env import (
    GFW_PERF_LOG_ENABLED,
    GFW_REQUEST_ID_HEADER_ENABLED,
    GFW_SECURITY_HEADERS_ENABLED,
    get_env_bool,
)


@dataclass(frozen=True)
class AppRuntimeSettings:
    security_headers_enabled: bool = True
    request_id_header_enabled: bool = True
    perf_log_enabled: bool = False
    csp_policy: str = DEFAULT_CSP_POLICY

    @staticmethod
    def from_env() -> "AppRuntimeSettings":
        return AppRuntimeSettings(
            security_headers_enabled=get_env_bool(GFW_SECURITY_HEADERS_ENABLED, default=True),
            request_id_header_enabled=get_env_bool(GFW_REQUEST_ID_HEADER_ENABLED, default=True),
            perf_log_enabled=get_env_bool(GFW_PERF_LOG_ENABLED, default=False),
        )
