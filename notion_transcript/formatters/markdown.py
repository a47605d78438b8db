"""Markdown transcript formatter.

WHY: Reviewers and downstream prompt builders want the transcript as a
plain file they can open or paste, with the headings, quotes, and code
fences the assembler produced.

HOW: Writes the transcript text as-is, ending with a single newline.

RULES:
- Content is result.transcript plus one trailing newline
- The empty sentinel is written like any other transcript
- Output suffix: "-transcript.md"
- Media type: "text/markdown"
"""

from __future__ import annotations

from typing import List

from notion_transcript.core.blocks import TranscriptResult
from notion_transcript.formatters.base import BaseFormatter, FormatterOutput


class MarkdownFormatter(BaseFormatter):
    """Formatter that writes the transcript text to a Markdown file."""

    @property
    def name(self) -> str:
        return "Markdown"

    def format(self, result: TranscriptResult) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-transcript.md",
                content=result.transcript + "\n",
                media_type="text/markdown",
            )
        ]
