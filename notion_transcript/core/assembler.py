"""Block-to-text rendering and TranscriptResult construction.

WHY: Downstream steps want one Markdown-like string, not a list of Notion
blocks. Each block type renders with its own marker (``# `` for headings,
``> `` for quotes, fenced code, ...). This module is the bridge between
the raw block list and the single transcript record.

HOW: A single pass over the blocks in input order. Each block is parsed
into a typed Block, looked up in a closed template table keyed by
BlockType, and its fragment is appended to an accumulator. After the
pass the accumulator is trimmed, the empty sentinel is substituted if
needed, the title is resolved, and words are counted.

RULES:
- Render order == input order; no grouping or sorting
- A block renders iff its type is recognized AND its rich_text is present
- Present-but-empty rich_text still renders its template (e.g. "\\n")
- has_content is computed from the trimmed text BEFORE the sentinel
- word_count is computed from the final transcript, sentinel included
- block_count counts every input block
- Never raises for JSON-shaped input
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any, Dict, List, Optional, Tuple

from notion_transcript.core.blocks import (
    EMPTY_TRANSCRIPT_SENTINEL,
    NUMBERED_LIST_PREFIX,
    Block,
    BlockType,
    RichTextSpan,
    TranscriptResult,
)
from notion_transcript.core.title import title_from_source

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# (prefix, suffix) around the joined span text, per block type.
# numbered_list_item's prefix is configurable and supplied at render time.
_FRAGMENT_TEMPLATES: Dict[BlockType, Tuple[str, str]] = {
    BlockType.PARAGRAPH: ("", "\n"),
    BlockType.HEADING_1: ("# ", "\n\n"),
    BlockType.HEADING_2: ("## ", "\n\n"),
    BlockType.HEADING_3: ("### ", "\n\n"),
    BlockType.QUOTE: ("> ", "\n\n"),
    BlockType.BULLETED_LIST_ITEM: ("- ", "\n"),
    BlockType.NUMBERED_LIST_ITEM: ("", "\n"),
    BlockType.TOGGLE: ("", "\n"),
    BlockType.CALLOUT: ("", "\n"),
    BlockType.CODE: ("```\n", "\n```\n"),
}


def join_spans(spans: Iterable[RichTextSpan]) -> str:
    """Concatenate span texts with no separator."""
    return "".join(span.plain_text for span in spans)


def count_words(text: str) -> int:
    """Count non-empty whitespace-delimited tokens in ``text``."""
    return len([word for word in _WHITESPACE_RE.split(text) if word])


def render_block(
    block: Block,
    numbered_prefix: str = NUMBERED_LIST_PREFIX,
) -> Optional[str]:
    """Render one block to its transcript fragment.

    Args:
        block: Parsed block.
        numbered_prefix: Marker placed before numbered_list_item text.

    Returns:
        The fragment string, or None when the block contributes nothing
        (unrecognized type, or missing rich_text).
    """
    if block.kind is None or block.spans is None:
        return None

    prefix, suffix = _FRAGMENT_TEMPLATES[block.kind]
    if block.kind is BlockType.NUMBERED_LIST_ITEM:
        prefix = numbered_prefix
    return prefix + join_spans(block.spans) + suffix


def assemble_transcript(
    blocks: Iterable[Any],
    title_source: Optional[Callable[[], Any]] = None,
    numbered_prefix: str = NUMBERED_LIST_PREFIX,
) -> TranscriptResult:
    """Flatten a block list into a TranscriptResult.

    WHY: This is the whole extraction step: blocks in, one record out.
    Upstream data is external, so the contract is best-effort rendering,
    never validation errors.

    HOW: Parse each item with Block.from_dict (Block instances are used
    as-is), render it, and accumulate fragments in order. Trim, compute
    has_content, substitute the sentinel, resolve the title through the
    injected accessor, and count words.

    Args:
        blocks: Raw Notion block dicts, n8n item envelopes, or Block objects.
        title_source: Zero-argument accessor returning the record that
            carries the title (e.g. the Notion page). May raise; failures
            fall back to the default title.
        numbered_prefix: Marker placed before numbered_list_item text.

    Returns:
        The assembled TranscriptResult.
    """
    fragments: List[str] = []
    block_count = 0
    skipped = 0

    for item in blocks:
        block_count += 1
        block = item if isinstance(item, Block) else Block.from_dict(item)
        fragment = render_block(block, numbered_prefix=numbered_prefix)
        if fragment is None:
            skipped += 1
            logger.debug("Skipping block %d of type %r", block_count, block.type)
            continue
        fragments.append(fragment)

    transcript = "".join(fragments).strip()
    has_content = len(transcript) > 0
    if not has_content:
        transcript = EMPTY_TRANSCRIPT_SENTINEL

    result = TranscriptResult(
        transcript=transcript,
        video_title=title_from_source(title_source),
        block_count=block_count,
        word_count=count_words(transcript),
        has_content=has_content,
    )
    logger.info(
        "Assembled transcript from %d blocks (%d skipped, %d words)",
        block_count,
        skipped,
        result.word_count,
    )
    return result
