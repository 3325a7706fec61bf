"""Infrastructure adapters for content sources, images, and logging."""

from glassface_site.infrastructure.image_urls import ImageUrlBuilder
from glassface_site.infrastructure.sanity_client import SanityClient
from glassface_site.infrastructure.snapshot import LocalSnapshot

__all__ = [
    "ImageUrlBuilder",
    "LocalSnapshot",
    "SanityClient",
]
