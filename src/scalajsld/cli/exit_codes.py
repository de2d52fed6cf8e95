"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — link completed, or ``--help``/``--version`` was printed."""

GENERAL_ERROR: int = 1
"""A known ScalajsldError was caught. User-facing message was displayed."""

USAGE_ERROR: int = 2
"""Malformed command line.  Matches the status argparse exits with."""

UNEXPECTED_ERROR: int = 3
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
