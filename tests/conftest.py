"""Shared pytest fixtures and configuration for the scalajsld test suite.

Guidelines
----------
* No real linker backend — the linker is faked at the protocol boundary.
* Core tests must be pure — no side effects.
* Filesystem tests use ``tmp_path`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest

from scalajsld.core.models import IRFile, ModuleInitializer


class FakeContainer:
    """In-memory container returning canned IR files."""

    def __init__(self, path: Path, files: Sequence[str] = (), error: Exception | None = None) -> None:
        self.path = path
        self._files = files
        self._error = error

    async def ir_files(self) -> Sequence[IRFile]:
        if self._error is not None:
            raise self._error
        return [IRFile(self.path, name) for name in self._files]


class FakeDiscovery:
    """Discovery that maps classpath entries to prepared containers."""

    def __init__(self, containers: dict[Path, FakeContainer] | None = None, error: Exception | None = None) -> None:
        self.containers = containers or {}
        self.error = error
        self.calls: list[tuple[Path, ...]] = []

    async def discover(self, classpath: Sequence[Path]) -> Sequence[FakeContainer]:
        self.calls.append(tuple(classpath))
        if self.error is not None:
            raise self.error
        return [self.containers[entry] for entry in classpath]


class FakeLinker:
    """Linker that records its inputs and returns or raises a canned result."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def link(
        self,
        ir_files: Sequence[IRFile],
        module_initializers: Sequence[ModuleInitializer],
        output: Any,
        logger: logging.Logger,
    ) -> None:
        self.calls.append(
            {
                "ir_files": list(ir_files),
                "module_initializers": list(module_initializers),
                "output": output,
                "logger": logger,
            }
        )
        if self.error is not None:
            raise self.error


class FakeOutput:
    """Output sink recording whether it was committed or discarded."""

    def __init__(self) -> None:
        self.committed = False
        self.discarded = False

    def commit(self) -> None:
        self.committed = True

    def discard(self) -> None:
        self.discarded = True


@pytest.fixture
def fake_linker() -> FakeLinker:
    return FakeLinker()


@pytest.fixture
def fake_output() -> FakeOutput:
    return FakeOutput()


@pytest.fixture(autouse=True)
def _reset_scalajsld_logger() -> Iterator[None]:
    """Undo :func:`setup_logging` so ``caplog`` sees records in every test."""
    yield
    logger = logging.getLogger("scalajsld")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
