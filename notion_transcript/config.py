"""Configuration constants, sentinels, and .env loading.

WHY: Centralizes every configurable value (API endpoints, template
location, the numbered-list glyph) so they are easy to find and
override. Credentials never live in source code.

HOW: python-dotenv loads the .env file on import. Constants are
module-level values read with os.getenv. The load_*_api_key() helpers
give a clear error when a key is missing.

RULES:
- API keys are loaded from the environment, never hardcoded
- All defaults can be overridden via environment variables
- Key loaders raise ValueError instead of returning placeholders
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from notion_transcript.core.blocks import NUMBERED_LIST_PREFIX as _DEFAULT_NUMBERED_PREFIX

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Notion
# ---------------------------------------------------------------------------

NOTION_PAGE_SIZE = 100
"""Maximum page size accepted by the Notion blocks.children.list endpoint."""

NUMBERED_LIST_PREFIX = os.getenv("NUMBERED_LIST_PREFIX", _DEFAULT_NUMBERED_PREFIX)
"""Prefix for numbered_list_item blocks.

Numbered items render with a fixed bullet glyph, not a running number.
Kept overridable because the intended numbering is unknown.
"""

# ---------------------------------------------------------------------------
# n8n workflow importer
# ---------------------------------------------------------------------------

N8N_API_URL = os.getenv("N8N_API_URL", "http://localhost:5678")
N8N_TEMPLATES_DIR = Path(
    os.getenv("N8N_TEMPLATES_DIR", str(Path("workflows") / "templates"))
)


def load_notion_api_key() -> str:
    """Load the Notion integration token from the environment.

    RULES:
    - Raises ValueError if the key is missing or empty
    """
    key = os.getenv("NOTION_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Notion API key not configured. "
            "Add NOTION_API_KEY to the .env file or the environment."
        )
    return key


def load_n8n_api_key() -> str:
    """Load the n8n API key from the environment.

    WHY: Every n8n public API call needs the X-N8N-API-KEY header.

    RULES:
    - Raises ValueError with setup instructions if the key is missing
    """
    key = os.getenv("N8N_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "N8N_API_KEY environment variable is required. "
            "Open n8n Settings > API, generate an API key, then "
            "set N8N_API_KEY in the .env file."
        )
    return key
