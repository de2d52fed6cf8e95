"""Shared Rich console for the CLI layer.

Everything user-facing (error messages, log records) is rendered on
stderr so that stdout stays free for ``--help`` and ``--version``.
"""

from __future__ import annotations

from rich.console import Console

console = Console(stderr=True, highlight=False)
