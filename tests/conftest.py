"""Shared test fixtures for the notion_transcript test suite.

WHY: Several test modules need the same realistic Notion data: a page
of mixed blocks as returned by blocks.children.list, and the database
page record that carries the video title.

HOW: The builders in helpers.py create individual block dicts; fixtures
assemble them into a sample page and a sample title record.
"""

from typing import Any, Dict, List

import pytest

from helpers import block, title_property


@pytest.fixture
def sample_page_blocks() -> List[Dict[str, Any]]:
    """A transcript page mixing every rendered block type and an image."""
    return [
        block("heading_1", "Episode 12"),
        block("paragraph", "Welcome back ", "everyone."),
        block("heading_2", "Topics"),
        block("bulleted_list_item", "Pricing"),
        block("numbered_list_item", "Roadmap"),
        {"object": "block", "type": "image", "image": {"type": "external"}},
        block("heading_3", "Quote of the day"),
        block("quote", "Ship it."),
        block("toggle", "Show notes"),
        block("callout", "Sponsored segment"),
        block("code", "print(1)"),
    ]


@pytest.fixture
def sample_page_record() -> Dict[str, Any]:
    """A database page record with both Title and Name properties."""
    return {
        "object": "page",
        "id": "page-123",
        "properties": {
            "Title": title_property("How We Price"),
            "Name": title_property("fallback-name"),
            "Status": {"id": "st", "type": "select", "select": {"name": "To process"}},
        },
    }
