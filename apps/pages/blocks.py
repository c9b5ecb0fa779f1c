"""Rendering of page content blocks.

Only ``html`` blocks are emitted as trusted markup; every other block type
goes through ``format_html`` and is escaped.
"""

from __future__ import annotations

from django.utils.html import format_html, format_html_join  # type: ignore
from django.utils.safestring import SafeString, mark_safe  # type: ignore

BLOCK_TYPES = ("text", "html", "image", "button")


def render_block(block: dict) -> SafeString:
    block_type = block.get("type")
    content = block.get("content") or ""
    if block_type == "text":
        return format_html('<div class="page-block page-block--text">{}</div>', content)
    if block_type == "html":
        return format_html('<div class="page-block page-block--html">{}</div>', mark_safe(content))
    if block_type == "image":
        caption = format_html('<p class="page-block__caption">{}</p>', content) if content else ""
        return format_html(
            '<div class="page-block page-block--image"><img src="{}" alt="{}">{}</div>',
            block.get("imageUrl") or "",
            block.get("alt") or "",
            caption,
        )
    if block_type == "button":
        return format_html(
            '<div class="page-block page-block--button"><a class="btn btn-primary" href="{}">{}</a></div>',
            block.get("linkUrl") or "#",
            content,
        )
    return mark_safe("")


def render_blocks(blocks) -> SafeString:
    return format_html_join("\n", "{}", ((render_block(block),) for block in blocks or [] if isinstance(block, dict)))
