"""Best-effort video title lookup.

WHY: The transcript record carries the video title, but the title lives on
a different record: the database page found by an earlier pipeline step.
That record may be missing, shaped differently, or unreachable. A broken
title must never break transcript extraction.

HOW: The caller injects a zero-argument accessor that returns the record.
resolve_title() digs the title out of the record's properties;
title_from_source() calls the accessor, absorbs every failure, and falls
back to DEFAULT_TITLE.

RULES:
- "Title" property wins over "Name"
- Title text is title[0].text.content; plain_text only when no property has content
- Empty strings do not count as a title
- Any exception from the accessor → DEFAULT_TITLE (logged, never raised)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Dict, Optional

from notion_transcript.core.blocks import DEFAULT_TITLE, unwrap_item

logger = logging.getLogger(__name__)

# Title-typed properties checked in order; first non-empty match wins.
TITLE_PROPERTY_KEYS = ("Title", "Name")


def _first_title_item(prop: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(prop, dict):
        return None
    items = prop.get("title")
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    return first if isinstance(first, dict) else None


def _content_text(item: Dict[str, Any]) -> Optional[str]:
    text = item.get("text")
    if isinstance(text, dict):
        content = text.get("content")
        if isinstance(content, str) and content:
            return content
    return None


def _plain_text(item: Dict[str, Any]) -> Optional[str]:
    plain = item.get("plain_text")
    if isinstance(plain, str) and plain:
        return plain
    return None


def resolve_title(record: Any) -> Optional[str]:
    """Extract the title from a Notion page record, or None if absent.

    RULES:
    - text.content is tried on Title, then Name
    - Only if neither has it, plain_text is tried on Title, then Name

    Args:
        record: A Notion page dict (or n8n item envelope around one).

    Returns:
        The first matching title text, or None.
    """
    record = unwrap_item(record)
    if not isinstance(record, dict):
        return None
    properties = record.get("properties")
    if not isinstance(properties, dict):
        return None

    items = [_first_title_item(properties.get(key)) for key in TITLE_PROPERTY_KEYS]
    items = [item for item in items if item is not None]
    for read in (_content_text, _plain_text):
        for item in items:
            title = read(item)
            if title is not None:
                return title
    return None


def title_from_source(source: Optional[Callable[[], Any]]) -> str:
    """Resolve the title through an injected accessor.

    Args:
        source: Zero-argument callable returning the title record, or None
            when the pipeline has no such record.

    Returns:
        The resolved title, or DEFAULT_TITLE.
    """
    if source is None:
        return DEFAULT_TITLE
    try:
        title = resolve_title(source())
    except Exception:  # noqa: BLE001
        logger.debug("Title source unavailable, using default", exc_info=True)
        return DEFAULT_TITLE
    if title is None:
        logger.debug("No Title/Name property on title record, using default")
        return DEFAULT_TITLE
    return title
