"""Allow ``python -m scalajsld`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m scalajsld`` behaves identically to the ``scalajsld``
console script.
"""

from __future__ import annotations

from scalajsld.cli.app import cli

if __name__ == "__main__":
    cli()
