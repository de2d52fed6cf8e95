"""Filesystem implementation of :class:`~scalajsld.core.protocols.ContainerDiscovery`.

A classpath entry becomes a container as follows:

* a directory is searched recursively for ``*.sjsir`` files;
* a ``.jar`` or ``.zip`` archive is listed for ``*.sjsir`` members;
* a single ``.sjsir`` file is its own container.

Anything else is an illegal classpath entry.  Blocking filesystem work
runs in worker threads via :func:`asyncio.to_thread`; every ``OSError``
and ``zipfile.BadZipFile`` is re-raised as
:class:`~scalajsld.exceptions.InputResolutionError`.
"""

from __future__ import annotations

import asyncio
import logging
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from scalajsld.core.models import IRFile
from scalajsld.exceptions import InputResolutionError

_log = logging.getLogger(__name__)

IR_SUFFIX: str = ".sjsir"
ARCHIVE_SUFFIXES: tuple[str, ...] = (".jar", ".zip")

_CLASSPATH_HINT = "Check the classpath entries passed on the command line."


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DirectoryContainer:
    """Directory tree of ``.sjsir`` files (e.g. a ``classes/`` folder)."""

    path: Path

    async def ir_files(self) -> Sequence[IRFile]:
        return await asyncio.to_thread(self._list)

    def _list(self) -> list[IRFile]:
        try:
            found = sorted(p for p in self.path.rglob(f"*{IR_SUFFIX}") if p.is_file())
        except OSError as exc:
            raise InputResolutionError(
                f"Cannot read directory {self.path}: {exc}",
                hint=_CLASSPATH_HINT,
            ) from exc
        return [IRFile(self.path, p.relative_to(self.path).as_posix()) for p in found]


@dataclass(frozen=True, slots=True)
class ArchiveContainer:
    """Jar or zip archive holding ``.sjsir`` members."""

    path: Path

    async def ir_files(self) -> Sequence[IRFile]:
        return await asyncio.to_thread(self._list)

    def _list(self) -> list[IRFile]:
        try:
            with zipfile.ZipFile(self.path) as archive:
                names = sorted(
                    info.filename
                    for info in archive.infolist()
                    if not info.is_dir() and info.filename.endswith(IR_SUFFIX)
                )
        except (OSError, zipfile.BadZipFile) as exc:
            raise InputResolutionError(
                f"Cannot read archive {self.path}: {exc}",
                hint=_CLASSPATH_HINT,
            ) from exc
        return [IRFile(self.path, name) for name in names]


@dataclass(frozen=True, slots=True)
class FileContainer:
    """A single ``.sjsir`` file passed directly on the classpath."""

    path: Path

    async def ir_files(self) -> Sequence[IRFile]:
        return [IRFile(self.path, "")]


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class FileIRContainerDiscovery:
    """Concrete :class:`ContainerDiscovery` backed by the local filesystem.

    This class satisfies the :class:`~scalajsld.core.protocols.ContainerDiscovery`
    protocol structurally — no explicit inheritance required.
    """

    async def discover(
        self, classpath: Sequence[Path],
    ) -> Sequence[DirectoryContainer | ArchiveContainer | FileContainer]:
        """Resolve every entry of *classpath* concurrently, keeping order.

        Raises
        ------
        InputResolutionError
            When an entry is missing, is not a supported kind of file,
            or is an archive that cannot be opened.
        """
        return await asyncio.gather(
            *(asyncio.to_thread(self.container_for, Path(entry)) for entry in classpath),
        )

    @staticmethod
    def container_for(entry: Path) -> DirectoryContainer | ArchiveContainer | FileContainer:
        """Classify a single classpath *entry*."""
        if entry.is_dir():
            return DirectoryContainer(entry)
        if not entry.exists():
            raise InputResolutionError(
                f"Classpath entry {entry} does not exist",
                hint=_CLASSPATH_HINT,
            )
        suffix = entry.suffix.lower()
        if suffix in ARCHIVE_SUFFIXES:
            if not zipfile.is_zipfile(entry):
                raise InputResolutionError(
                    f"Classpath entry {entry} is not a valid archive",
                    hint=_CLASSPATH_HINT,
                )
            return ArchiveContainer(entry)
        if suffix == IR_SUFFIX:
            return FileContainer(entry)
        raise InputResolutionError(
            f"Illegal classpath entry {entry}",
            hint="Classpath entries must be directories, .jar/.zip archives or .sjsir files.",
        )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def read_ir_file(ir_file: IRFile) -> bytes:
    """Return the raw bytes of *ir_file*, wherever it lives.

    Linker backends use this to load the IR behind an :class:`IRFile`
    handle.

    Raises
    ------
    InputResolutionError
        When the file or archive member cannot be read.
    """
    _log.debug("Reading %s", ir_file.path)
    try:
        if not ir_file.relative_path:
            return ir_file.container.read_bytes()
        if ir_file.container.is_dir():
            return (ir_file.container / ir_file.relative_path).read_bytes()
        with zipfile.ZipFile(ir_file.container) as archive:
            return archive.read(ir_file.relative_path)
    except (OSError, KeyError, zipfile.BadZipFile) as exc:
        raise InputResolutionError(f"Cannot read {ir_file.path}: {exc}") from exc
