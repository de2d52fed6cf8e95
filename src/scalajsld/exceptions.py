"""Custom exception hierarchy for scalajsld.

All exceptions that cross layer boundaries must inherit from
:class:`ScalajsldError`.  Raw exceptions from the filesystem or the
linker backend must NEVER propagate beyond the infrastructure and
orchestration layers — they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
ScalajsldError
├── UsageError
│   ├── InvalidMainMethodFormat
│   └── UnknownModuleKind
├── InputResolutionError
├── LinkError
└── EnvironmentError
"""

from __future__ import annotations


class ScalajsldError(Exception):
    """Base exception for all scalajsld errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(ScalajsldError):
    """Raised when a flag or its value is malformed."""


class InvalidMainMethodFormat(UsageError):
    """Raised when a ``--mainMethod`` token has no ``Owner.method`` split."""


class UnknownModuleKind(UsageError):
    """Raised when a ``--moduleKind`` token names no supported module kind."""


# --- Inputs ----------------------------------------------------------------

class InputResolutionError(ScalajsldError):
    """Raised when a classpath entry cannot be read or is corrupt."""


# --- Linking ---------------------------------------------------------------

class LinkError(ScalajsldError):
    """Raised when the linker reports a failure."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ScalajsldError):
    """Raised when a required runtime dependency is not available."""
