from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from glassface_site.core.defaults import (
    DEFAULT_DEV_ENV_NAMES,
    DEFAULT_ENV_NAME,
    DEFAULT_REMOTE_TIMEOUT_SEC,
    DEFAULT_SANITY_API_VERSION,
    DEFAULT_SANITY_DATASET,
    DEFAULT_SANITY_PROJECT_ID,
    DEFAULT_SNAPSHOT_PATH,
)
from glassface_site.core.env import (
    GFW_BASE_PATH,
    GFW_ENV,
    GFW_REMOTE_TIMEOUT_SEC,
    GFW_SANITY_API_VERSION,
    GFW_SANITY_DATASET,
    GFW_SANITY_PROJECT_ID,
    GFW_SANITY_USE_CDN,
    GFW_SNAPSHOT_PATH,
    get_env,
    get_env_bool,
    get_env_float,
)


DEV_ENV_NAMES = set(DEFAULT_DEV_ENV_NAMES)


def _repo_root() -> Path:
    # app/glassface_site/core/config.py
    # parents[0]=core, [1]=glassface_site, [2]=app, [3]=repo root
    return Path(__file__).resolve().parents[3]


def _resolve_repo_relative_path(raw_path: str) -> str:
    value = str(raw_path or "").strip()
    if not value:
        return value
    path = Path(value)
    if path.is_absolute():
        return str(path)
    return str((_repo_root() / path).resolve())


def normalize_base_path(raw_value: str) -> str:
    value = str(raw_value or "").strip().strip("/")
    if not value:
        return ""
    return f"/{value}"


def _clean_api_version(raw_value: str) -> str:
    value = str(raw_value or "").strip()
    if value.lower().startswith("v"):
        value = value[1:]
    return value or DEFAULT_SANITY_API_VERSION


@dataclass(frozen=True)
class AppConfig:
    sanity_project_id: str = DEFAULT_SANITY_PROJECT_ID
    sanity_dataset: str = DEFAULT_SANITY_DATASET
    sanity_api_version: str = DEFAULT_SANITY_API_VERSION
    sanity_use_cdn: bool = False
    remote_timeout_sec: float = DEFAULT_REMOTE_TIMEOUT_SEC
    snapshot_path: str = DEFAULT_SNAPSHOT_PATH
    base_path: str = ""
    env: str = DEFAULT_ENV_NAME

    @property
    def is_dev_env(self) -> bool:
        return self.env in DEV_ENV_NAMES

    @property
    def remote_enabled(self) -> bool:
        return bool(self.sanity_project_id and self.sanity_dataset)

    @staticmethod
    def from_env() -> "AppConfig":
        env_name = get_env(GFW_ENV, DEFAULT_ENV_NAME).lower() or DEFAULT_ENV_NAME
        return AppConfig(
            sanity_project_id=get_env(GFW_SANITY_PROJECT_ID, DEFAULT_SANITY_PROJECT_ID),
            sanity_dataset=get_env(GFW_SANITY_DATASET, DEFAULT_SANITY_DATASET),
            sanity_api_version=_clean_api_version(get_env(GFW_SANITY_API_VERSION, DEFAULT_SANITY_API_VERSION)),
            sanity_use_cdn=get_env_bool(GFW_SANITY_USE_CDN, default=False),
            remote_timeout_sec=get_env_float(
                GFW_REMOTE_TIMEOUT_SEC,
                default=DEFAULT_REMOTE_TIMEOUT_SEC,
                min_value=1.0,
            ),
            snapshot_path=_resolve_repo_relative_path(get_env(GFW_SNAPSHOT_PATH, DEFAULT_SNAPSHOT_PATH)),
            base_path=normalize_base_path(get_env(GFW_BASE_PATH, "")),
            env=env_name,
        )
