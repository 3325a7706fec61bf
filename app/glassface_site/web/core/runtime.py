from __future__ import annotations

from functools import lru_cache

from glassface_site.content.resolver import ContentResolver
from glassface_site.core.config import AppConfig
from glassface_site.infrastructure.image_urls import ImageUrlBuilder
from glassface_site.infrastructure.sanity_client import SanityClient
from glassface_site.infrastructure.snapshot import LocalSnapshot


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig.from_env()


@lru_cache(maxsize=1)
def get_remote_client() -> SanityClient | None:
    config = get_config()
    if not config.remote_enabled:
        return None
    return SanityClient.from_config(config)


def get_snapshot() -> LocalSnapshot:
    return LocalSnapshot(get_config().snapshot_path)


def get_resolver() -> ContentResolver:
    return ContentResolver(remote=get_remote_client(), snapshot=get_snapshot())


def get_image_urls() -> ImageUrlBuilder | None:
    return ImageUrlBuilder.from_config(get_config())


def reset_runtime() -> None:
    client = get_remote_client() if get_remote_client.cache_info().currsize else None
    if client is not None:
        client.close()
    get_remote_client.cache_clear()
    get_config.cache_clear()
