"""Command-line grammar for ``scalajsld``.

Every flag is a :class:`Flag` record in :data:`FLAGS`: its names, the
value it takes (if any), and an ``apply`` function that returns an
updated :class:`~scalajsld.core.models.OptionModel`.  The records are
registered on a plain :class:`argparse.ArgumentParser` through one
shared action, :class:`_ApplyFlag`, so argparse owns scanning, usage
and help output while the table owns the semantics.

Mutually exclusive switches (``-f/-n/-u``, ``-d/-q/-qq``,
``--stdlib/--noStdlib``) write the same model field, so the last one on
the command line wins.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from scalajsld.core.models import CheckedBehavior, ModuleKind, Optimization, OptionModel
from scalajsld.core.parsers import parse_module_initializer, parse_module_kind
from scalajsld.exceptions import UsageError
from scalajsld.version import __version__

PROG: str = "scalajsld"

Apply = Callable[[OptionModel, Any], OptionModel]


# ---------------------------------------------------------------------------
# Flag records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Flag:
    """Declarative description of one command-line argument."""

    names: tuple[str, ...]
    """Option strings, or a single bare name for the positional."""

    apply: Apply
    """Return the model updated with one value of this flag."""

    help: str
    metavar: str | None = None
    """Value placeholder.  ``None`` means the flag is a switch."""

    required: bool = False
    hidden: bool = False

    @property
    def positional(self) -> bool:
        return not self.names[0].startswith("-")

    def argparse_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "action": _ApplyFlag,
            "flag": self,
            "default": argparse.SUPPRESS,
            "help": argparse.SUPPRESS if self.hidden else self.help,
        }
        if self.positional:
            kwargs["nargs"] = "*"
        elif self.metavar is None:
            kwargs["nargs"] = 0
        else:
            kwargs["required"] = self.required
        if self.metavar is not None:
            kwargs["metavar"] = self.metavar
        return kwargs


class _ApplyFlag(argparse.Action):
    """Apply a :class:`Flag` to ``namespace.options``.

    A :class:`UsageError` raised by the flag's value parser becomes an
    :class:`argparse.ArgumentError`, which argparse reports as usage
    plus ``argument -k/--moduleKind: ...`` before exiting with status 2.
    """

    def __init__(self, option_strings: list[str], dest: str, *, flag: Flag, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.flag = flag

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if self.nargs == 0:
            tokens = [None]
        elif isinstance(values, list):
            tokens = values
        else:
            tokens = [values]

        options: OptionModel = namespace.options
        try:
            for token in tokens:
                options = self.flag.apply(options, token)
        except UsageError as exc:
            message = f"{exc}. {exc.hint}" if exc.hint else str(exc)
            raise argparse.ArgumentError(self, message) from exc
        namespace.options = options


# ---------------------------------------------------------------------------
# Apply helpers
# ---------------------------------------------------------------------------

def _set(**changes: Any) -> Apply:
    return lambda options, _value: replace(options, **changes)


def _add_classpath_entry(options: OptionModel, value: str) -> OptionModel:
    return replace(options, classpath=(*options.classpath, Path(value)))


def _add_main_method(options: OptionModel, value: str) -> OptionModel:
    initializer = parse_module_initializer(value)
    return replace(options, module_initializers=(*options.module_initializers, initializer))


def _directory_uri(value: str) -> str:
    uri = Path(value).absolute().as_uri()
    return uri if uri.endswith("/") else uri + "/"


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

FLAGS: tuple[Flag, ...] = (
    Flag(
        ("classpath",),
        _add_classpath_entry,
        "Entries of Scala.js classpath to link",
        metavar="<value> ...",
    ),
    Flag(
        ("-mm", "--mainMethod"),
        _add_main_method,
        "Execute the specified main(Array[String]) method on startup",
        metavar="<full.name.Object.main>",
    ),
    Flag(
        ("-o", "--output"),
        lambda options, value: replace(options, output=Path(value)),
        "Output file of linker (required)",
        metavar="<file>",
        required=True,
    ),
    Flag(
        ("-f", "--fastOpt"),
        _set(optimization=Optimization.FAST),
        "Optimize code (this is the default)",
    ),
    Flag(
        ("-n", "--noOpt"),
        _set(optimization=Optimization.NO),
        "Don't optimize code",
    ),
    Flag(
        ("-u", "--fullOpt"),
        _set(optimization=Optimization.FULL),
        "Fully optimize code (uses Google Closure Compiler)",
    ),
    Flag(
        ("-p", "--prettyPrint"),
        _set(pretty_print=True),
        "Pretty print full opted code (meaningful with -u)",
    ),
    Flag(
        ("-s", "--sourceMap"),
        _set(source_map=True),
        "Produce a source map for the produced code",
    ),
    Flag(
        ("--compliantAsInstanceOfs",),
        lambda options, _value: replace(
            options,
            semantics=options.semantics.with_as_instance_ofs(CheckedBehavior.COMPLIANT),
        ),
        "Use compliant asInstanceOfs",
    ),
    Flag(
        ("--es2015",),
        lambda options, _value: replace(
            options,
            es_features=options.es_features.with_use_ecmascript_2015(True),
        ),
        "Use ECMAScript 2015",
    ),
    Flag(
        ("-k", "--moduleKind"),
        lambda options, value: replace(options, module_kind=parse_module_kind(value)),
        "Module kind (" + ", ".join(kind.value for kind in ModuleKind) + ")",
        metavar="<kind>",
    ),
    Flag(
        ("-c", "--checkIR"),
        _set(check_ir=True),
        "Check IR before optimizing",
    ),
    Flag(
        ("-r", "--relativizeSourceMap"),
        lambda options, value: replace(options, relativize_source_map=_directory_uri(value)),
        "Relativize source map with respect to given path (meaningful with -s)",
        metavar="<path>",
    ),
    Flag(
        ("--noStdlib",),
        _set(stdlib=None),
        "Don't automatically include Scala.js standard library",
    ),
    Flag(
        ("--stdlib",),
        lambda options, value: replace(options, stdlib=Path(value)),
        "Location of Scala.js standard library. This is set by the runner "
        "script and automatically prepended to the classpath. "
        "Use --noStdlib to not include it.",
        metavar="<scala.js stdlib jar>",
        hidden=True,
    ),
    Flag(
        ("-d", "--debug"),
        _set(log_level=logging.DEBUG),
        "Debug mode: Show full log",
    ),
    Flag(
        ("-q", "--quiet"),
        _set(log_level=logging.WARNING),
        "Only show warnings & errors",
    ),
    Flag(
        ("-qq", "--really-quiet"),
        _set(log_level=logging.ERROR),
        "Only show errors",
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_parser(flags: Sequence[Flag] = FLAGS) -> argparse.ArgumentParser:
    """Construct the ``scalajsld`` argument parser from *flags*."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Link Scala.js IR into a single JavaScript file.",
        allow_abbrev=False,
    )
    parser.set_defaults(options=OptionModel())
    for flag in flags:
        parser.add_argument(*flag.names, **flag.argparse_kwargs())
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show scalajsld version",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> OptionModel:
    """Parse *argv* (default ``sys.argv[1:]``) into a final OptionModel.

    Positional classpath entries may appear anywhere among the flags.

    Raises
    ------
    SystemExit
        Status 2 after printing usage for a malformed command line;
        status 0 after ``--help`` or ``--version``.
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(None if argv is None else list(argv))
    return args.options
