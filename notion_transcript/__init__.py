"""Notion Transcript Extractor — flattens Notion page blocks into a transcript.

WHY: The content pipeline keeps video transcripts as Notion pages made of
heterogeneous blocks (paragraphs, headings, lists, code...). Downstream
steps (summarizers, blog generators) want one plain Markdown-like string
plus a few facts about it. This package turns the block list into that
string and ships the small n8n importer that installs the pipeline.

HOW: Three stages — fetch (notion-client), assemble (core), format
(pluggable formatters). The workflow importer talks to n8n over httpx.
Each stage is independently testable.

RULES:
- The assembler never raises on malformed block data
- All formatters consume the same TranscriptResult
- Network access lives in notion/ and api/, never in core/
"""

__version__ = "0.1.0"
