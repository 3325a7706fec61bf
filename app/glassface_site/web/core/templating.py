from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

from glassface_site.core.config import AppConfig
from glassface_site.core.defaults import (
    CARD_IMAGE_SIZE,
    GALLERY_IMAGE_SIZE,
    HERO_IMAGE_SIZE,
    SITE_TAGLINE,
    SITE_TITLE,
)
from glassface_site.infrastructure.image_urls import ImageUrlBuilder
from glassface_site.web.utils.portable_text import PortableTextRenderer

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


def category_label(value: Any) -> str:
    # Only the first hyphen is replaced: "visual-art" -> "visual art".
    return str(value or "").replace("-", " ", 1)


def build_templates(
    config: AppConfig,
    image_urls: ImageUrlBuilder | None,
    *,
    trailing_slash: bool = False,
) -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    base_path = config.base_path

    def href(slug: str = "") -> str:
        slug = str(slug or "").strip("/")
        if not slug:
            return f"{base_path}/"
        return f"{base_path}/{slug}/" if trailing_slash else f"{base_path}/{slug}"

    def static_url(name: str) -> str:
        return f"{base_path}/static/{str(name).lstrip('/')}"

    def image_url(source: Any, size: tuple[int, int]) -> str | None:
        if image_urls is None or not source:
            return None
        width, height = size
        return image_urls.url_for(source, width=width, height=height)

    def content_image_url(block: Any) -> str | None:
        if image_urls is None:
            return None
        return image_urls.url_for(block)

    renderer = PortableTextRenderer(image_url=content_image_url)

    templates.env.filters["category_label"] = category_label
    templates.env.globals.update(
        {
            "site_title": SITE_TITLE,
            "site_tagline": SITE_TAGLINE,
            "current_year": datetime.now(timezone.utc).year,
            "card_image_size": CARD_IMAGE_SIZE,
            "hero_image_size": HERO_IMAGE_SIZE,
            "gallery_image_size": GALLERY_IMAGE_SIZE,
            "href": href,
            "static_url": static_url,
            "image_url": image_url,
            "render_blocks": renderer.render,
        }
    )
    return templates
