"""Unit tests for the transcript assembler.

WHY: The assembler is the only place where block data turns into text.
A wrong marker, a swallowed block, or a miscounted word changes what
every downstream step (summaries, blog posts) sees.

HOW: Tests cover each rendering rule and the post-processing steps:
  - Per-type fragment templates (headings, quotes, lists, code fences)
  - Unrecognized types and absent payloads contribute nothing
  - Present-but-empty rich_text still contributes its template
  - Trimming, empty sentinel, has_content, word and block counts
  - Order preservation and the overridable numbered-list prefix
  - Totality over malformed input

RULES:
- Expected strings are written out literally, not rebuilt from templates
- word_count always equals count_words(result.transcript)
"""

import pytest

from helpers import block, span
from notion_transcript.core.assembler import (
    assemble_transcript,
    count_words,
    join_spans,
    render_block,
)
from notion_transcript.core.blocks import (
    DEFAULT_TITLE,
    EMPTY_TRANSCRIPT_SENTINEL,
    Block,
    RichTextSpan,
)


class TestRenderBlock:
    """Each recognized block type renders with its own template."""

    @pytest.mark.parametrize(
        "block_type, expected",
        [
            ("paragraph", "Hello\n"),
            ("heading_1", "# Hello\n\n"),
            ("heading_2", "## Hello\n\n"),
            ("heading_3", "### Hello\n\n"),
            ("quote", "> Hello\n\n"),
            ("bulleted_list_item", "- Hello\n"),
            ("numbered_list_item", "• Hello\n"),
            ("toggle", "Hello\n"),
            ("callout", "Hello\n"),
            ("code", "```\nHello\n```\n"),
        ],
    )
    def test_fragment_template(self, block_type, expected):
        assert render_block(Block.from_dict(block(block_type, "Hello"))) == expected

    def test_code_block_is_fenced(self):
        fragment = render_block(Block.from_dict(block("code", "print(1)")))
        assert fragment == "```\nprint(1)\n```\n"

    def test_spans_joined_without_separator(self):
        fragment = render_block(Block.from_dict(block("paragraph", "Hel", "lo ", "world")))
        assert fragment == "Hello world\n"

    def test_unrecognized_type_renders_nothing(self):
        assert render_block(Block.from_dict({"type": "image", "image": {}})) is None

    def test_missing_payload_renders_nothing(self):
        assert render_block(Block.from_dict({"type": "paragraph"})) is None

    def test_missing_rich_text_renders_nothing(self):
        assert render_block(Block.from_dict({"type": "quote", "quote": {"color": "red"}})) is None

    def test_payload_under_other_key_renders_nothing(self):
        """The payload must sit under the block's own type key."""
        data = {"type": "heading_1", "paragraph": {"rich_text": [span("x")]}}
        assert render_block(Block.from_dict(data)) is None

    def test_empty_rich_text_still_renders_template(self):
        assert render_block(Block.from_dict({"type": "paragraph", "paragraph": {"rich_text": []}})) == "\n"
        assert render_block(Block.from_dict({"type": "heading_2", "heading_2": {"rich_text": []}})) == "## \n\n"

    def test_span_without_plain_text_is_empty(self):
        data = {"type": "paragraph", "paragraph": {"rich_text": [{"type": "text"}, span("b")]}}
        assert render_block(Block.from_dict(data)) == "b\n"

    def test_numbered_prefix_is_overridable(self):
        fragment = render_block(
            Block.from_dict(block("numbered_list_item", "Step")),
            numbered_prefix="1. ",
        )
        assert fragment == "1. Step\n"

    def test_numbered_prefix_does_not_affect_bullets(self):
        fragment = render_block(
            Block.from_dict(block("bulleted_list_item", "Item")),
            numbered_prefix="1. ",
        )
        assert fragment == "- Item\n"


class TestAssembleScenarios:
    """End-to-end behavior of assemble_transcript on representative inputs."""

    def test_heading_and_paragraph(self):
        blocks = [
            {"type": "heading_1", "heading_1": {"rich_text": [{"plain_text": "Intro"}]}},
            {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "Hello world"}]}},
        ]
        result = assemble_transcript(blocks)
        assert result.transcript == "# Intro\n\nHello world"
        assert result.has_content is True
        assert result.block_count == 2
        # "#" is a whitespace-delimited token of the final transcript
        assert result.word_count == 4
        assert result.word_count == count_words(result.transcript)

    def test_empty_input_uses_sentinel(self):
        result = assemble_transcript([])
        assert result.transcript == EMPTY_TRANSCRIPT_SENTINEL
        assert result.has_content is False
        assert result.block_count == 0
        assert result.word_count == count_words(EMPTY_TRANSCRIPT_SENTINEL)
        assert result.word_count == 8

    def test_unrecognized_block_is_counted_not_rendered(self):
        blocks = [
            {"type": "image", "image": {"type": "file", "file": {"url": "https://x"}}},
            block("paragraph", "Only me"),
        ]
        result = assemble_transcript(blocks)
        assert result.transcript == "Only me"
        assert result.block_count == 2
        assert result.word_count == 2

    def test_full_sample_page(self, sample_page_blocks):
        result = assemble_transcript(sample_page_blocks)
        assert result.transcript == (
            "# Episode 12\n\n"
            "Welcome back everyone.\n"
            "## Topics\n\n"
            "- Pricing\n"
            "• Roadmap\n"
            "### Quote of the day\n\n"
            "> Ship it.\n\n"
            "Show notes\n"
            "Sponsored segment\n"
            "```\nprint(1)\n```"
        )
        assert result.block_count == 11
        assert result.word_count == 27
        assert result.has_content is True

    def test_default_title_without_source(self, sample_page_blocks):
        assert assemble_transcript(sample_page_blocks).video_title == DEFAULT_TITLE

    def test_title_from_injected_source(self, sample_page_blocks, sample_page_record):
        result = assemble_transcript(sample_page_blocks, title_source=lambda: sample_page_record)
        assert result.video_title == "How We Price"

    def test_raising_title_source_falls_back(self, sample_page_blocks):
        def broken():
            raise RuntimeError("node 'Find Videos to Process' has not run")

        result = assemble_transcript(sample_page_blocks, title_source=broken)
        assert result.video_title == "Untitled"
        assert result.has_content is True


class TestPostProcessing:
    """Trimming, sentinel substitution, and metadata derivation."""

    def test_surrounding_whitespace_is_trimmed(self):
        result = assemble_transcript([block("paragraph", "   padded text  ")])
        assert result.transcript == "padded text"

    def test_only_empty_blocks_yield_sentinel(self):
        blocks = [
            {"type": "paragraph", "paragraph": {"rich_text": []}},
            block("paragraph", "   "),
            {"type": "video", "video": {}},
        ]
        result = assemble_transcript(blocks)
        assert result.transcript == EMPTY_TRANSCRIPT_SENTINEL
        assert result.has_content is False
        assert result.block_count == 3

    def test_blank_lines_between_blocks_survive(self):
        blocks = [
            block("paragraph", "first"),
            {"type": "paragraph", "paragraph": {"rich_text": []}},
            block("paragraph", "second"),
        ]
        assert assemble_transcript(blocks).transcript == "first\n\nsecond"

    def test_order_is_preserved(self):
        a, b, c = block("paragraph", "a"), block("quote", "b"), block("heading_3", "c")
        assert assemble_transcript([a, b, c]).transcript == "a\n> b\n\n### c"
        assert assemble_transcript([c, b, a]).transcript == "### c\n\n> b\n\na"

    def test_numbered_prefix_passed_through(self):
        blocks = [block("numbered_list_item", "one"), block("numbered_list_item", "two")]
        result = assemble_transcript(blocks, numbered_prefix="- ")
        assert result.transcript == "- one\n- two"

    def test_accepts_generators_and_block_objects(self):
        parsed = Block.from_dict(block("callout", "pre-parsed"))
        result = assemble_transcript(x for x in [parsed, block("toggle", "raw")])
        assert result.transcript == "pre-parsed\nraw"
        assert result.block_count == 2

    def test_accepts_n8n_item_envelopes(self):
        items = [{"json": block("heading_2", "Wrapped")}, {"json": block("paragraph", "body")}]
        assert assemble_transcript(items).transcript == "## Wrapped\n\nbody"

    def test_repeated_calls_are_independent(self):
        first = assemble_transcript([block("paragraph", "one")])
        second = assemble_transcript([block("paragraph", "two")])
        assert first.transcript == "one"
        assert second.transcript == "two"


class TestMalformedInput:
    """Best-effort rendering: malformed data never raises."""

    @pytest.mark.parametrize(
        "bad",
        [
            None,
            42,
            "paragraph",
            [],
            {},
            {"type": None},
            {"type": 7, "7": {"rich_text": []}},
            {"type": "paragraph", "paragraph": None},
            {"type": "paragraph", "paragraph": ["not", "a", "dict"]},
            {"type": "paragraph", "paragraph": {"rich_text": "not a list"}},
            {"type": "paragraph", "paragraph": {"rich_text": None}},
        ],
    )
    def test_malformed_block_is_skipped(self, bad):
        result = assemble_transcript([bad, block("paragraph", "ok")])
        assert result.transcript == "ok"
        assert result.block_count == 2

    def test_malformed_spans_degrade_to_empty(self):
        data = {
            "type": "paragraph",
            "paragraph": {"rich_text": [None, "str", {"plain_text": None}, {"plain_text": "x"}]},
        }
        assert assemble_transcript([data]).transcript == "x"


class TestHelpers:
    """join_spans and count_words."""

    def test_join_spans(self):
        assert join_spans([RichTextSpan("a"), RichTextSpan(""), RichTextSpan("b")]) == "ab"
        assert join_spans([]) == ""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", 0),
            ("   \n\t ", 0),
            ("one", 1),
            ("  one   two\nthree\t four  ", 4),
            ("```\nprint(1)\n```", 3),
        ],
    )
    def test_count_words(self, text, expected):
        assert count_words(text) == expected
