"""Core link orchestrator — drives one link from classpath to output.

The orchestrator depends on a
:class:`~scalajsld.core.protocols.ContainerDiscovery` and a
:class:`~scalajsld.core.protocols.Linker` injected at construction
time.  It is responsible for:

* Resolving the classpath into containers and IR files, concurrently.
* Invoking the linker exactly once on the complete set of IR files.
* Committing the output on success and discarding it on failure.
* Ensuring only :class:`~scalajsld.exceptions.ScalajsldError` subclasses
  escape.

The whole sequence runs on an ``asyncio`` event loop that the calling
thread blocks on with no timeout.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from scalajsld.core.models import IRFile, LinkState, ModuleInitializer
from scalajsld.core.protocols import ContainerDiscovery, Linker, LinkerOutput
from scalajsld.exceptions import InputResolutionError, LinkError, ScalajsldError

_log = logging.getLogger(__name__)


class LinkOrchestrator:
    """Single-shot driver for ``resolve → enumerate → link``.

    Parameters
    ----------
    discovery:
        Any object satisfying the :class:`ContainerDiscovery` protocol.
    linker:
        Any object satisfying the :class:`Linker` protocol, already
        configured.
    logger:
        Logger handed to the linker.  Defaults to this module's logger.
    """

    def __init__(
        self,
        discovery: ContainerDiscovery,
        linker: Linker,
        logger: logging.Logger | None = None,
    ) -> None:
        self._discovery: ContainerDiscovery = discovery
        self._linker: Linker = linker
        self._logger: logging.Logger = logger or _log
        self.state: LinkState = LinkState.IDLE

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        classpath: Sequence[Path],
        module_initializers: Sequence[ModuleInitializer],
        output: LinkerOutput,
    ) -> None:
        """Link *classpath* into *output*, blocking until done.

        Raises
        ------
        InputResolutionError
            When the classpath cannot be resolved.  The linker is not
            called.
        LinkError
            When the linker fails.
        """
        asyncio.run(self.link(classpath, module_initializers, output))

    async def link(
        self,
        classpath: Sequence[Path],
        module_initializers: Sequence[ModuleInitializer],
        output: LinkerOutput,
    ) -> None:
        """Coroutine behind :meth:`run`."""
        if self.state is not LinkState.IDLE:
            raise RuntimeError(f"orchestrator already used (state={self.state.value})")

        self._transition(LinkState.RESOLVING_INPUTS)
        try:
            ir_files = await self._resolve_inputs(classpath)
        except ScalajsldError:
            self._transition(LinkState.FAILED)
            raise
        except Exception as exc:
            self._transition(LinkState.FAILED)
            raise InputResolutionError(
                f"Unexpected error while reading the classpath: {exc}",
            ) from exc

        self._logger.info("Linking %d IR files", len(ir_files))
        self._transition(LinkState.LINKING)
        try:
            await self._linker.link(
                ir_files,
                tuple(module_initializers),
                output,
                self._logger,
            )
        except (ScalajsldError, asyncio.CancelledError):
            self._abort(output)
            raise
        except Exception as exc:
            self._abort(output)
            raise LinkError(f"Unexpected linker error: {exc}") from exc

        try:
            output.commit()
        except ScalajsldError:
            self._abort(output)
            raise
        self._transition(LinkState.DONE)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _resolve_inputs(self, classpath: Sequence[Path]) -> list[IRFile]:
        containers = await self._discovery.discover(classpath)
        _log.debug("Found %d IR containers", len(containers))
        per_container = await asyncio.gather(
            *(container.ir_files() for container in containers),
        )
        return [ir_file for files in per_container for ir_file in files]

    def _abort(self, output: LinkerOutput) -> None:
        self._transition(LinkState.FAILED)
        output.discard()

    def _transition(self, state: LinkState) -> None:
        _log.debug("%s -> %s", self.state.value, state.value)
        self.state = state
