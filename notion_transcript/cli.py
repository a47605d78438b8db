"""Command-line interface for the Notion Transcript Extractor.

WHY: Users need two things from the terminal: turn a Notion page into a
transcript file, and install the n8n pipeline workflows. The CLI wires
the Notion fetch, the assembler, the formatters, and the n8n importer
behind two subcommands.

HOW: argparse with subcommands. ``extract`` fetches a page's blocks with
notion-client (or reads them from a JSON file), assembles the
TranscriptResult, and saves the selected formats. ``import-workflows``
runs the async importer via asyncio.run(). Status messages go to
stderr; only --stdout output goes to stdout.

RULES:
- extract: PAGE_ID, or --blocks-file (with optional --page-file) for offline use
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-transcript-2.md)
- import-workflows takes no arguments; config comes from the environment
- Exit 1 on config/API errors, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, List, NoReturn, Optional, Tuple

import httpx
from notion_client import APIResponseError

from notion_transcript.api.client import N8nClient
from notion_transcript.config import N8N_TEMPLATES_DIR, NUMBERED_LIST_PREFIX
from notion_transcript.core.assembler import assemble_transcript
from notion_transcript.core.blocks import TranscriptResult
from notion_transcript.formatters import FORMATTERS
from notion_transcript.formatters.base import FormatterOutput
from notion_transcript.formatters.json_record import JSONRecordFormatter
from notion_transcript.notion.fetch import build_notion_client, fetch_page, fetch_page_blocks
from notion_transcript.workflows.importer import (
    WORKFLOW_TEMPLATES,
    check_connection,
    import_workflows,
)

_NEXT_STEPS = (
    "Next steps:",
    "1. Open n8n and navigate to Workflows",
    "2. Configure credentials for each workflow:",
    "   - Notion API (notion_credentials)",
    "   - OpenAI API (openai_credentials)",
    "   - Google Gemini API (google_palm_credentials)",
    "3. Update Notion database IDs in workflow nodes",
    "4. Test with sample data",
    "5. Activate workflows when ready",
)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> NoReturn:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. abc123-transcript.md)
    - Conflict: insert counter before the extension (abc123-transcript-2.md)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _read_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_blocks_file(path: str) -> List[Any]:
    """Load blocks from a JSON file.

    RULES:
    - A top-level list is the block list (bare blocks or n8n items)
    - An object with a "results" list is a saved blocks.children.list response
    - Anything else raises ValueError
    """
    data = _read_json(path)
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return data["results"]
    raise ValueError(
        "Blocks file must contain a JSON list or an object with a 'results' list: {}".format(path)
    )


def _format_keys(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(FORMATTERS.keys())
    keys = [k.strip() for k in raw.split(",") if k.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _collect_input(
    args: argparse.Namespace,
) -> Tuple[List[Any], Optional[Callable[[], Any]], str]:
    """Return (blocks, title_source, stem) for the extract command."""
    if args.blocks_file:
        blocks = load_blocks_file(args.blocks_file)
        title_source: Optional[Callable[[], Any]] = None
        if args.page_file:
            page_file = args.page_file
            title_source = lambda: _read_json(page_file)  # noqa: E731
        stem = args.page_id or Path(args.blocks_file).stem
        _status("Loaded {} blocks from {}".format(len(blocks), args.blocks_file))
        return blocks, title_source, stem

    if not args.page_id:
        _fail("Provide a PAGE_ID or --blocks-file.")

    notion = build_notion_client()
    page_id = args.page_id
    _status("Fetching blocks for page {}...".format(page_id))
    blocks = fetch_page_blocks(notion, page_id)
    _status("  Fetched {} blocks".format(len(blocks)))
    return blocks, (lambda: fetch_page(notion, page_id)), page_id


def run_extract(args: argparse.Namespace) -> TranscriptResult:
    """Execute the extract command and return the assembled result."""
    format_keys = _format_keys(args.formats)
    output_dir = Path(args.output_dir).resolve() if args.output_dir else Path.cwd()
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        blocks, title_source, stem = _collect_input(args)
    except (ValueError, OSError, APIResponseError, httpx.HTTPError) as e:
        _fail(str(e))

    result = assemble_transcript(
        blocks,
        title_source=title_source,
        numbered_prefix=args.numbered_prefix,
    )
    _status("  Title: {}".format(result.video_title))
    _status("  {} blocks, {} words{}".format(
        result.block_count,
        result.word_count,
        "" if result.has_content else " (no content)",
    ))

    if args.stdout:
        print(JSONRecordFormatter().format(result)[0].content)
        return result

    saved: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(result):
            path = _save_output(output, stem, output_dir)
            saved.append(path)
            _status("  Saved: {}".format(path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))
    return result


async def _run_import(templates_dir: Path) -> int:
    async with N8nClient() as client:
        _status("Connecting to n8n at {}...".format(client.api_url))
        if not await check_connection(client):
            _status("Make sure n8n is running, the API is enabled, and the API key is correct.")
            return 1

        _status("Importing workflows from {}...".format(templates_dir))
        summary = await import_workflows(client, WORKFLOW_TEMPLATES, templates_dir)

    for created in summary.succeeded:
        _status("  Created: {} (ID: {})".format(created.name, created.id))
    for template in summary.failed:
        _status("  Failed: {}".format(template.name))

    _status("")
    _status("Import summary: {} succeeded, {} failed".format(
        summary.success_count, summary.fail_count,
    ))
    if summary.success_count:
        _status("")
        for line in _NEXT_STEPS:
            _status(line)
    return 0


def run_import(args: Optional[argparse.Namespace] = None) -> int:
    """Execute the import-workflows command and return its exit code."""
    try:
        return asyncio.run(_run_import(N8N_TEMPLATES_DIR))
    except ValueError as e:
        # Missing N8N_API_KEY
        print("Error: {}".format(e), file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="notion_transcript",
        description="Extract Notion page transcripts and install the n8n pipeline workflows.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser(
        "extract",
        help="Flatten a Notion page's blocks into a transcript.",
    )
    extract.add_argument(
        "page_id",
        nargs="?",
        default=None,
        help="Notion page ID to fetch (requires NOTION_API_KEY).",
    )
    extract.add_argument(
        "--blocks-file",
        default=None,
        help="Read blocks from a JSON file instead of the Notion API.",
    )
    extract.add_argument(
        "--page-file",
        default=None,
        help="JSON page record used as the title source with --blocks-file.",
    )
    extract.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )
    extract.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: current directory).",
    )
    extract.add_argument(
        "--numbered-prefix",
        default=NUMBERED_LIST_PREFIX,
        help="Marker for numbered list items (default: %(default)r).",
    )
    extract.add_argument(
        "--stdout",
        action="store_true",
        help="Print the JSON record to stdout instead of writing files.",
    )
    extract.set_defaults(func=run_extract)

    importer = subparsers.add_parser(
        "import-workflows",
        help="Create the bundled n8n workflows (reads N8N_API_URL / N8N_API_KEY).",
    )
    importer.set_defaults(func=run_import)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m notion_transcript`` and ``notion-transcript``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        outcome = args.func(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)

    if args.command == "import-workflows" and outcome:
        sys.exit(outcome)


def import_main() -> None:
    """Entry point for the ``n8n-import-workflows`` console script (no arguments)."""
    main(["import-workflows"])


if __name__ == "__main__":
    main()
