"""Core block model, transcript assembly, and title resolution.

WHY: The core package is the stable heart of the extractor: the typed
block view and the deterministic block-to-text fold. It is pure: no
network, no files, no global state.

HOW: blocks.py defines the data structures, assembler.py renders blocks
into a TranscriptResult, title.py resolves the video title from an
injected record accessor.

RULES:
- No I/O in this package
- Malformed input degrades, it never raises
"""
