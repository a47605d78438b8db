"""Paginated block listing and page retrieval via notion-client.

WHY: A transcript page can hold hundreds of blocks, but
blocks.children.list returns at most 100 per call. The extractor needs
the complete, ordered list before assembling.

HOW: Loop on blocks.children.list, passing next_cursor as start_cursor
until has_more is false. pages.retrieve returns the page record whose
Title/Name property is used as the video title.

RULES:
- Only top-level children are fetched (no recursion into toggles etc.)
- Block order is preserved across pages of results
- APIResponseError from notion-client propagates to the caller
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from notion_client import Client

from notion_transcript.config import NOTION_PAGE_SIZE, load_notion_api_key

logger = logging.getLogger(__name__)


def build_notion_client(api_key: Optional[str] = None) -> Client:
    """Create an authenticated Notion client (key defaults to NOTION_API_KEY)."""
    return Client(auth=api_key or load_notion_api_key())


def fetch_page_blocks(
    notion: Client,
    page_id: str,
    page_size: int = NOTION_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Return every top-level block of a page, in order.

    Args:
        notion: Authenticated notion_client.Client.
        page_id: The page (or block) whose children to list.
        page_size: Results per request, at most 100.

    Returns:
        The raw block dicts, exactly as the API returned them.
    """
    blocks: List[Dict[str, Any]] = []
    cursor = None
    requests = 0
    while True:
        kwargs: Dict[str, Any] = {"block_id": page_id, "page_size": page_size}
        if cursor:
            kwargs["start_cursor"] = cursor
        resp = notion.blocks.children.list(**kwargs)
        requests += 1
        blocks.extend(resp.get("results", []))
        if not resp.get("has_more"):
            break
        cursor = resp.get("next_cursor")
        if not cursor:
            break

    logger.info("Fetched %d blocks for page %s in %d request(s)", len(blocks), page_id, requests)
    return blocks


def fetch_page(notion: Client, page_id: str) -> Dict[str, Any]:
    """Retrieve the page record (properties carry the title)."""
    return notion.pages.retrieve(page_id=page_id)
