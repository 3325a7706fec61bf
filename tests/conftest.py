from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

APP_ROOT = Path(__file__).resolve().parents[1] / "app"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from glassface_site.web.core import runtime  # noqa: E402

_ENV_KEYS = (
    "GFW_ENV",
    "GFW_SANITY_PROJECT_ID",
    "GFW_SANITY_DATASET",
    "GFW_SANITY_API_VERSION",
    "GFW_SANITY_USE_CDN",
    "GFW_REMOTE_TIMEOUT_SEC",
    "GFW_SNAPSHOT_PATH",
    "GFW_BASE_PATH",
    "GFW_ERROR_INCLUDE_DETAILS",
)


@pytest.fixture(autouse=True)
def _clean_runtime(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    runtime.get_config.cache_clear()
    runtime.get_remote_client.cache_clear()
    yield
    runtime.get_config.cache_clear()
    runtime.get_remote_client.cache_clear()


@pytest.fixture()
def write_snapshot(tmp_path: Path) -> Callable[[Any], Path]:
    def _write(documents: Any, *, name: str = "projects.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(documents), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def song_a_snapshot(write_snapshot: Callable[[Any], Path]) -> Path:
    return write_snapshot(
        [
            {
                "slug": {"current": "song-a"},
                "title": "Song A",
                "featured": True,
                "publishedAt": "2024-01-01",
            }
        ]
    )
