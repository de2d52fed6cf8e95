"""CLI application entry point for scalajsld.

This module is the **sole error boundary** for the entire application.
It catches :class:`~scalajsld.exceptions.ScalajsldError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — parsing is delegated to
  :mod:`scalajsld.cli.arguments`, everything else to the core and
  infrastructure layers.
* Usage errors never reach this module's handlers: argparse prints the
  usage message and exits with status 2 before anything touches the
  classpath or the output file.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rich.markup import escape

from scalajsld.cli import exit_codes
from scalajsld.cli.arguments import parse_options
from scalajsld.cli.console import console
from scalajsld.core.models import OptionModel
from scalajsld.exceptions import ScalajsldError, UsageError


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_link(options: OptionModel) -> int:
    """Link the classpath described by *options*.

    Flow:
    1. Configure logging at the requested level.
    2. Derive the link configuration and effective classpath.
    3. Load the linker backend for that configuration.
    4. Resolve inputs, link, and wait for completion.
    """
    from scalajsld.core.config_builder import build_classpath, build_link_configuration
    from scalajsld.core.link_orchestrator import LinkOrchestrator
    from scalajsld.infra.ir_containers import FileIRContainerDiscovery
    from scalajsld.infra.linker_backend import load_linker
    from scalajsld.infra.linker_output import FileLinkerOutput
    from scalajsld.utils.logging import setup_logging

    if options.output is None:
        raise UsageError("the following arguments are required: -o/--output")

    logger = setup_logging(options.log_level, console=console)
    config = build_link_configuration(options)
    classpath = build_classpath(options)

    linker = load_linker(config)
    output = FileLinkerOutput.for_path(options.output, source_map=config.source_map)
    orchestrator = LinkOrchestrator(FileIRContainerDiscovery(), linker, logger)
    orchestrator.run(classpath, options.module_initializers, output)

    logger.debug("Wrote %s", options.output)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the scalajsld CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    SystemExit
        From argparse, for usage errors, ``--help`` and ``--version``.
    """
    options = parse_options(argv)
    return _handle_link(options)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ScalajsldError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
