from glassface_site.content.prerender import list_prerender_slugs
from glassface_site.content.resolver import ContentResolver

__all__ = ["ContentResolver", "list_prerender_slugs"]
