"""Package entry point for ``python -m notion_transcript``.

WHY: Users run ``python -m notion_transcript extract <page_id>`` or
``python -m notion_transcript import-workflows`` without installing the
console scripts.

HOW: Delegates straight to the CLI's main() function.
"""

from notion_transcript.cli import main

if __name__ == "__main__":
    main()
