"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and linker
backends must satisfy.  Core code depends ONLY on these protocols —
never on concrete implementations — so the orchestrator can be driven
by fakes in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from scalajsld.core.models import IRFile, ModuleInitializer


class IRContainer(Protocol):
    """A classpath entry that holds zero or more IR files."""

    @property
    def path(self) -> Path:
        """Location of the container on disk."""
        ...  # pragma: no cover

    async def ir_files(self) -> Sequence[IRFile]:
        """Enumerate the IR files inside this container.

        Raises
        ------
        InputResolutionError
            When the container cannot be read.
        """
        ...  # pragma: no cover


class ContainerDiscovery(Protocol):
    """Contract for turning a classpath into IR containers."""

    async def discover(self, classpath: Sequence[Path]) -> Sequence[IRContainer]:
        """Return every container reachable from *classpath*.

        Raises
        ------
        InputResolutionError
            When an entry is missing, unreadable or corrupt.
        """
        ...  # pragma: no cover


class LinkerOutput(Protocol):
    """Sink the linker writes the generated JavaScript into.

    Nothing becomes visible at the requested output path before
    :meth:`commit` is called.
    """

    def commit(self) -> None:
        """Publish everything written so far."""
        ...  # pragma: no cover

    def discard(self) -> None:
        """Drop everything written so far."""
        ...  # pragma: no cover


class Linker(Protocol):
    """Contract for the external linking engine.

    A linker is created for one :class:`~scalajsld.core.models.LinkConfiguration`
    and receives everything else through :meth:`link`.
    """

    async def link(
        self,
        ir_files: Sequence[IRFile],
        module_initializers: Sequence[ModuleInitializer],
        output: LinkerOutput,
        logger: logging.Logger,
    ) -> None:
        """Link *ir_files* and write the result into *output*.

        Raises
        ------
        LinkError
            When linking fails (unresolved references, IR version
            mismatch, …).
        """
        ...  # pragma: no cover
