"""Builders for Notion-shaped test data.

RULES:
- Block dicts match the Notion API shape (type + same-named payload)
- Only the fields the extractor reads are filled in, plus a few extras
  (id, object, annotations) to prove they are ignored
"""

from typing import Any, Dict


def span(text: str) -> Dict[str, Any]:
    """A Notion rich-text object with the given plain text."""
    return {
        "type": "text",
        "text": {"content": text, "link": None},
        "annotations": {"bold": False, "italic": False, "code": False},
        "plain_text": text,
        "href": None,
    }


def block(block_type: str, *texts: str) -> Dict[str, Any]:
    """A Notion block of ``block_type`` whose rich_text holds ``texts``."""
    return {
        "object": "block",
        "id": "blk-{}-{}".format(block_type, len(texts)),
        "type": block_type,
        block_type: {"rich_text": [span(t) for t in texts], "color": "default"},
    }


def title_property(text: str) -> Dict[str, Any]:
    """A title-typed page property holding ``text``."""
    return {"id": "title", "type": "title", "title": [span(text)]}
