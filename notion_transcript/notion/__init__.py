"""Notion page fetching — the upstream step that feeds the assembler.

WHY: The assembler consumes a block list and a title record; both come
from the Notion API. Keeping the calls here leaves core/ free of I/O.

HOW: Thin helpers over notion_client.Client.

RULES:
- All Notion API calls go through this package
"""

from notion_transcript.notion.fetch import (
    build_notion_client,
    fetch_page,
    fetch_page_blocks,
)

__all__ = ["build_notion_client", "fetch_page", "fetch_page_blocks"]
