from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any, Callable, Mapping

import bleach
from markupsafe import Markup, escape

LOGGER = logging.getLogger(__name__)

_ALLOWED_TAGS: list[str] = [
    "a",
    "p",
    "br",
    "strong",
    "em",
    "u",
    "s",
    "ul",
    "ol",
    "li",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "blockquote",
    "code",
    "figure",
    "img",
]

_ALLOWED_ATTRS: dict[str, Iterable[str]] = {
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "width", "height", "loading"],
}

_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_BLOCK_STYLES = {
    "normal": "p",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "h5": "h5",
    "h6": "h6",
    "blockquote": "blockquote",
}

_DECORATORS = {
    "strong": "strong",
    "em": "em",
    "code": "code",
    "underline": "u",
    "strike-through": "s",
}

_LIST_TAGS = {"bullet": "ul", "number": "ol"}

ImageUrlFn = Callable[[Any], "str | None"]


def _render_span(span: Mapping[str, Any], mark_defs: Mapping[str, Mapping[str, Any]]) -> str:
    text = str(escape(str(span.get("text") or ""))).replace("\n", "<br>")
    for mark in span.get("marks") or ():
        tag = _DECORATORS.get(str(mark))
        if tag:
            text = f"<{tag}>{text}</{tag}>"
            continue
        definition = mark_defs.get(str(mark))
        if definition and definition.get("_type") == "link" and definition.get("href"):
            href = escape(str(definition["href"]))
            text = f'<a href="{href}" target="_blank" rel="noopener noreferrer">{text}</a>'
    return text


def _render_children(block: Mapping[str, Any]) -> str:
    mark_defs = {
        str(item.get("_key")): item
        for item in block.get("markDefs") or ()
        if isinstance(item, Mapping) and item.get("_key")
    }
    return "".join(
        _render_span(child, mark_defs)
        for child in block.get("children") or ()
        if isinstance(child, Mapping) and child.get("_type", "span") == "span"
    )


class PortableTextRenderer:
    """Renders Portable Text blocks to sanitized HTML."""

    def __init__(self, *, image_url: ImageUrlFn | None = None) -> None:
        self._image_url = image_url

    def render(self, blocks: Any) -> Markup:
        if isinstance(blocks, Mapping):
            blocks = [blocks]
        if not isinstance(blocks, (list, tuple)):
            return Markup("")
        try:
            raw_html = self._render_blocks(blocks)
        except Exception:
            LOGGER.exception(
                "Rich content render failed.",
                extra={"event": "rich_content_render_failed"},
            )
            return Markup("")
        cleaned = bleach.clean(
            raw_html,
            tags=_ALLOWED_TAGS,
            attributes=_ALLOWED_ATTRS,
            protocols=_ALLOWED_PROTOCOLS,
            strip=True,
        )
        return Markup(cleaned)

    def _render_blocks(self, blocks: list[Any] | tuple[Any, ...]) -> str:
        parts: list[str] = []
        # (tag, level) of currently open lists, innermost last
        open_lists: list[tuple[str, int]] = []
        for block in blocks:
            if not isinstance(block, Mapping):
                continue
            list_item = block.get("listItem")
            if block.get("_type") == "block" and list_item:
                tag = _LIST_TAGS.get(str(list_item), "ul")
                level = max(1, int(block.get("level") or 1))
                while open_lists and (
                    open_lists[-1][1] > level or (open_lists[-1][1] == level and open_lists[-1][0] != tag)
                ):
                    parts.append(f"</{open_lists.pop()[0]}>")
                while not open_lists or open_lists[-1][1] < level:
                    parts.append(f"<{tag}>")
                    open_lists.append((tag, (open_lists[-1][1] + 1) if open_lists else 1))
                parts.append(f"<li>{_render_children(block)}</li>")
                continue

            while open_lists:
                parts.append(f"</{open_lists.pop()[0]}>")
            parts.append(self._render_block(block))

        while open_lists:
            parts.append(f"</{open_lists.pop()[0]}>")
        return "".join(parts)

    def _render_block(self, block: Mapping[str, Any]) -> str:
        block_type = block.get("_type")
        if block_type == "block":
            tag = _BLOCK_STYLES.get(str(block.get("style") or "normal"), "p")
            return f"<{tag}>{_render_children(block)}</{tag}>"
        if block_type == "image" and self._image_url is not None:
            url = self._image_url(block)
            if not url:
                return ""
            alt = escape(str(block.get("alt") or ""))
            return f'<figure><img src="{escape(url)}" alt="{alt}" loading="lazy"></figure>'
        LOGGER.debug("Skipping unsupported rich content block. type=%s", block_type)
        return ""
