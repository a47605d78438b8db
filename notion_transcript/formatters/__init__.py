"""Output formatter registry.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes adding a format trivial: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from notion_transcript.formatters.json_record import JSONRecordFormatter
from notion_transcript.formatters.markdown import MarkdownFormatter

if TYPE_CHECKING:
    from notion_transcript.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "markdown": MarkdownFormatter,
    "json": JSONRecordFormatter,
}
