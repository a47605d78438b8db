"""JSON transcript record formatter.

WHY: Pipeline steps that run after extraction (summarizers, blog
generators) read the transcript record as JSON: transcript, videoTitle,
blockCount, wordCount, hasContent. A malformed record would fail far
downstream, so the record is checked against a schema here.

HOW: Serializes TranscriptResult.to_dict() and validates it with
jsonschema against transcript_result_schema.json (shipped next to this
module) before returning.

RULES:
- Keys are camelCase, exactly the five record fields
- Validate output against the schema before returning; raise on failure
- Non-ASCII text is written as-is (ensure_ascii=False)
- Output suffix: "-transcript.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from notion_transcript.core.blocks import TranscriptResult
from notion_transcript.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "transcript_result_schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def get_schema() -> dict[str, Any]:
    """Return the TranscriptResult JSON schema, loading it once."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class JSONRecordFormatter(BaseFormatter):
    """Formatter that writes the schema-validated transcript record."""

    @property
    def name(self) -> str:
        return "JSON Record"

    def format(self, result: TranscriptResult) -> list[FormatterOutput]:
        """Convert the TranscriptResult into its JSON record.

        Raises:
            jsonschema.ValidationError: If the record does not conform to
                the transcript result schema.
        """
        record = result.to_dict()
        jsonschema.validate(instance=record, schema=get_schema())

        return [
            FormatterOutput(
                suffix="-transcript.json",
                content=json.dumps(record, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
