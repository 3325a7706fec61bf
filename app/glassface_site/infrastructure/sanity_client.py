from __future__ import annotations

import json
import logging
import time
from typing import Any, Mapping

import requests

from glassface_site.core.config import AppConfig
from glassface_site.core.content_errors import ContentSourceError
from glassface_site.core.defaults import SANITY_API_CDN_HOST, SANITY_API_HOST

LOGGER = logging.getLogger(__name__)


class SanityClient:
    """Read-only client for the Sanity HTTP query API.

    Each ``fetch`` issues exactly one GET request. There is no retry and no
    response cache; callers decide what to do when the source is unavailable.
    """

    def __init__(
        self,
        *,
        project_id: str,
        dataset: str,
        api_version: str,
        use_cdn: bool = False,
        timeout_sec: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.project_id = str(project_id or "").strip()
        self.dataset = str(dataset or "").strip()
        self.api_version = str(api_version or "").strip()
        self.use_cdn = bool(use_cdn)
        self.timeout_sec = float(timeout_sec)
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AppConfig) -> "SanityClient":
        return cls(
            project_id=config.sanity_project_id,
            dataset=config.sanity_dataset,
            api_version=config.sanity_api_version,
            use_cdn=config.sanity_use_cdn,
            timeout_sec=config.remote_timeout_sec,
        )

    @property
    def query_url(self) -> str:
        host = SANITY_API_CDN_HOST if self.use_cdn else SANITY_API_HOST
        return f"https://{self.project_id}.{host}/v{self.api_version}/data/query/{self.dataset}"

    def config(self) -> dict[str, Any]:
        return {
            "projectId": self.project_id,
            "dataset": self.dataset,
            "apiVersion": self.api_version,
            "useCdn": self.use_cdn,
        }

    def fetch(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        if not self.project_id or not self.dataset:
            raise ContentSourceError("Remote content source is not configured.")

        request_params = {"query": query}
        for name, value in (params or {}).items():
            request_params[f"${name}"] = json.dumps(value)

        started = time.perf_counter()
        try:
            response = self._session.get(
                self.query_url,
                params=request_params,
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            raise ContentSourceError(f"Remote content request failed: {exc}") from exc

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        LOGGER.debug(
            "Remote content query finished. status=%s ms=%.2f",
            response.status_code,
            elapsed_ms,
            extra={
                "event": "remote_query",
                "status_code": int(response.status_code),
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
        if response.status_code != 200:
            raise ContentSourceError(
                f"Remote content source returned status {response.status_code}: {response.text[:200]}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise ContentSourceError("Remote content source returned a non-JSON body.") from exc
        if not isinstance(body, dict) or "result" not in body:
            raise ContentSourceError("Remote content response has no result member.")
        return body["result"]

    def close(self) -> None:
        self._session.close()
