from __future__ import annotations

# Environment and config defaults
DEFAULT_ENV_NAME = "dev"
DEFAULT_DEV_ENV_NAMES = ("dev", "development", "local")

# Remote content source
DEFAULT_SANITY_PROJECT_ID = "wxjd5ij6"
DEFAULT_SANITY_DATASET = "production"
DEFAULT_SANITY_API_VERSION = "2024-01-01"
DEFAULT_REMOTE_TIMEOUT_SEC = 10.0
SANITY_API_HOST = "api.sanity.io"
SANITY_API_CDN_HOST = "apicdn.sanity.io"
SANITY_IMAGE_CDN_BASE_URL = "https://cdn.sanity.io/images"

# Local snapshot
DEFAULT_SNAPSHOT_PATH = "data/projects.json"

# Pre-rendering
PRERENDER_FIXED_SLUGS = ("about", "contact")
DEFAULT_EXPORT_DIR = "dist"
DEFAULT_EXPORT_BASE_PATH = "/glassfaceworld-site"

# Site copy
SITE_TITLE = "Glassfaceworld"
SITE_TAGLINE = "Creative works by Face. Music, visual art, video, and design."

# Image sizes (width, height)
CARD_IMAGE_SIZE = (600, 400)
HERO_IMAGE_SIZE = (1200, 675)
GALLERY_IMAGE_SIZE = (600, 400)

# Security/header defaults
DEFAULT_CSP_POLICY = (
    "default-src 'self'; "
    "base-uri 'self'; "
    "frame-ancestors 'none'; "
    "object-src 'none'; "
    "img-src 'self' data: https://cdn.sanity.io; "
    "style-src 'self' 'unsafe-inline'; "
    "script-src 'self'; "
    "connect-src 'self'; "
    "form-action 'self'"
)
