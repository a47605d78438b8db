"""Typed views over Notion block records and the transcript result record.

WHY: Notion returns blocks as loosely shaped JSON: a ``type`` discriminator
plus a payload keyed by that same type name (``{"type": "quote", "quote":
{"rich_text": [...]}}``). Upstream data is external and heterogeneous, so
every field may be missing or mistyped. The assembler needs a small,
well-typed form that already encodes "absent" versus "present but empty".

HOW: BlockType is the closed set of discriminators the assembler renders.
Block.from_dict() reads the discriminator and the matching payload's
``rich_text`` list into RichTextSpan objects, degrading anything malformed
to "absent" instead of raising. TranscriptResult is the single output
record, serialized to the camelCase shape downstream steps expect.

RULES:
- Block.spans is None when the payload or its rich_text list is absent
- Block.spans == [] when rich_text is present but empty (still renders)
- Unknown discriminators parse to kind=None and never render
- from_dict never raises for JSON-shaped input
- TranscriptResult is immutable once built
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

EMPTY_TRANSCRIPT_SENTINEL = "No transcript content found in the page blocks."
"""Substituted for the transcript when no block produced any text."""

DEFAULT_TITLE = "Untitled"
"""Video title used when the title source is missing or unreadable."""

NUMBERED_LIST_PREFIX = "• "
"""Default prefix for numbered_list_item blocks (a bullet, not a number)."""


class BlockType(str, enum.Enum):
    """Block discriminators the assembler knows how to render."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    QUOTE = "quote"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TOGGLE = "toggle"
    CALLOUT = "callout"
    CODE = "code"

    @classmethod
    def parse(cls, value: Any) -> BlockType | None:
        """Return the member for ``value``, or None if it is not recognized."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class RichTextSpan:
    """A single rich-text fragment; only its plain text is kept."""

    plain_text: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> RichTextSpan:
        """Parse a Notion rich-text object.

        RULES:
        - Missing, null, or empty plain_text → ""
        - Numbers and booleans render as JavaScript prints them (1.0 → "1",
          True → "true"); falsy values, objects and arrays → ""
        - A span that is not a dict at all → ""
        """
        if not isinstance(data, dict):
            return cls()
        return cls(plain_text=_coerce_text(data.get("plain_text")))


@dataclass(frozen=True)
class Block:
    """A Notion block reduced to its discriminator and rich-text spans.

    Attributes:
        type: Raw discriminator string ("" when absent or not a string).
        kind: Parsed BlockType, or None for unrecognized discriminators.
        spans: Spans from ``block[type]["rich_text"]``, or None when that
               payload or list is absent.
    """

    type: str
    kind: BlockType | None = None
    spans: list[RichTextSpan] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Block:
        """Parse a raw Notion block dict (or n8n item envelope).

        WHY: The block list comes from an external API and may contain
        anything. Parsing must be total so the assembler stays total.

        HOW: Unwrap an n8n ``{"json": ...}`` envelope, read ``type``, then
        look up the payload stored under that same key and its
        ``rich_text`` list.

        RULES:
        - Non-dict input → Block(type="")
        - Payload missing / not a dict → spans=None
        - rich_text missing / not a list → spans=None
        """
        data = unwrap_item(data)
        if not isinstance(data, dict):
            return cls(type="")

        raw_type = data.get("type")
        block_type = raw_type if isinstance(raw_type, str) else ""
        spans: list[RichTextSpan] | None = None

        payload = data.get(block_type) if block_type else None
        if isinstance(payload, dict):
            rich_text = payload.get("rich_text")
            if isinstance(rich_text, list):
                spans = [RichTextSpan.from_dict(span) for span in rich_text]

        return cls(type=block_type, kind=BlockType.parse(block_type), spans=spans)


@dataclass(frozen=True)
class TranscriptResult:
    """The assembled transcript and its metadata.

    RULES:
    - transcript: trimmed text, or EMPTY_TRANSCRIPT_SENTINEL when empty
    - block_count: number of input blocks, recognized or not
    - word_count: tokens in the final transcript (sentinel included)
    - has_content: whether real text existed before sentinel substitution
    """

    transcript: str
    video_title: str
    block_count: int
    word_count: int
    has_content: bool

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase record consumed by pipeline steps."""
        return {
            "transcript": self.transcript,
            "videoTitle": self.video_title,
            "blockCount": self.block_count,
            "wordCount": self.word_count,
            "hasContent": self.has_content,
        }


def unwrap_item(item: Any) -> Any:
    """Return the block dict inside an n8n ``{"json": {...}}`` item.

    Bare block dicts (they carry ``type`` or ``object`` keys) pass through.
    """
    if (
        isinstance(item, dict)
        and "type" not in item
        and isinstance(item.get("json"), dict)
    ):
        return item["json"]
    return item


def _coerce_text(value: Any) -> str:
    """Render a scalar plain_text value the way a JavaScript join would.

    RULES:
    - Falsy values (None, "", 0, 0.0, NaN, False) → ""
    - True → "true"
    - Integral floats drop the fraction (1.0 → "1"); infinities → "Infinity"
    - Objects and arrays → "" (JavaScript would print "[object Object]")
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, int):
        return str(value) if value else ""
    if isinstance(value, float):
        if not value or math.isnan(value):
            return ""
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(int(value)) if value.is_integer() else repr(value)
    return ""
