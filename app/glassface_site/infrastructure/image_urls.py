from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from glassface_site.core.config import AppConfig
from glassface_site.core.defaults import SANITY_IMAGE_CDN_BASE_URL

ASSET_REF_PATTERN = re.compile(r"^image-(?P<asset_id>[A-Za-z0-9]+)-(?P<dimensions>\d+x\d+)-(?P<fmt>[a-z0-9]+)$")


def _asset_of(source: Any) -> Any:
    if isinstance(source, Mapping):
        asset = source.get("asset")
        if asset is not None:
            return asset
    return source


def _size_params(width: int | None, height: int | None) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    if width:
        params.append(("w", str(int(width))))
    if height:
        params.append(("h", str(int(height))))
    return params


class ImageUrlBuilder:
    """Turns Sanity image references into CDN URLs with requested dimensions."""

    def __init__(self, *, project_id: str, dataset: str) -> None:
        self.project_id = project_id
        self.dataset = dataset

    @classmethod
    def from_config(cls, config: AppConfig) -> "ImageUrlBuilder | None":
        if not config.remote_enabled:
            return None
        return cls(project_id=config.sanity_project_id, dataset=config.sanity_dataset)

    def url_for(self, source: Any, *, width: int | None = None, height: int | None = None) -> str | None:
        asset = _asset_of(source)
        if isinstance(asset, Mapping):
            direct_url = asset.get("url")
            if isinstance(direct_url, str) and direct_url.startswith(("http://", "https://")):
                return self._with_size(direct_url, width, height)
            asset = asset.get("_ref") or asset.get("_id")
        if not isinstance(asset, str):
            return None

        asset = asset.strip()
        if asset.startswith(("http://", "https://")):
            return self._with_size(asset, width, height)
        match = ASSET_REF_PATTERN.match(asset)
        if match is None:
            return None
        filename = f"{match.group('asset_id')}-{match.group('dimensions')}.{match.group('fmt')}"
        url = f"{SANITY_IMAGE_CDN_BASE_URL}/{self.project_id}/{self.dataset}/{filename}"
        return self._with_size(url, width, height)

    @staticmethod
    def _with_size(url: str, width: int | None, height: int | None) -> str:
        size_params = _size_params(width, height)
        if not size_params:
            return url
        parts = urlsplit(url)
        query = [(key, value) for key, value in parse_qsl(parts.query) if key not in {"w", "h"}]
        query.extend(size_params)
        return urlunsplit(parts._replace(query=urlencode(query)))
