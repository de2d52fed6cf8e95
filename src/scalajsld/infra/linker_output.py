"""File-backed implementation of :class:`~scalajsld.core.protocols.LinkerOutput`.

The linker writes into temporary siblings of the requested paths.
Nothing appears at the output path until :meth:`FileLinkerOutput.commit`
renames them into place, so a failed link never leaves a partial file
behind.
"""

from __future__ import annotations

import os
from pathlib import Path

from scalajsld.exceptions import LinkError

SOURCE_MAP_SUFFIX: str = ".map"


def _staging_path(target: Path) -> Path:
    return target.with_name(f".{target.name}.tmp")


def _backup_path(target: Path) -> Path:
    return target.with_name(f".{target.name}.bak")


class FileLinkerOutput:
    """Output sink bound to a JavaScript file and an optional source map.

    Parameters
    ----------
    js_path:
        Final location of the generated JavaScript.
    source_map_path:
        Final location of the source map, or ``None`` when no source
        map is requested.
    """

    def __init__(self, js_path: Path, source_map_path: Path | None = None) -> None:
        self.js_path: Path = js_path
        self.source_map_path: Path | None = source_map_path

    @classmethod
    def for_path(cls, path: Path, *, source_map: bool = False) -> FileLinkerOutput:
        """Build an output for *path*, with ``<path>.map`` when *source_map*."""
        map_path = path.with_name(path.name + SOURCE_MAP_SUFFIX) if source_map else None
        return cls(path, map_path)

    # ------------------------------------------------------------------
    # Linker-facing API
    # ------------------------------------------------------------------

    @property
    def js_file_uri(self) -> str:
        """``file:`` URI of the JavaScript file, for source-map references."""
        return self.js_path.absolute().as_uri()

    @property
    def source_map_uri(self) -> str | None:
        if self.source_map_path is None:
            return None
        return self.source_map_path.absolute().as_uri()

    def write_js(self, content: str | bytes) -> None:
        """Write the generated JavaScript (staged until :meth:`commit`)."""
        self._write(self.js_path, content)

    def write_source_map(self, content: str | bytes) -> None:
        """Write the source map (staged until :meth:`commit`).

        Raises
        ------
        LinkError
            When this output was created without a source map.
        """
        if self.source_map_path is None:
            raise LinkError("No source map was requested for this output.")
        self._write(self.source_map_path, content)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def commit(self) -> None:
        """Move every staged file to its final location.

        All or nothing: if any rename fails, targets already published
        are restored to their previous content (or removed) and every
        staged file is deleted.

        Raises
        ------
        LinkError
            When a staged file cannot be moved into place.
        """
        published: list[tuple[Path, Path | None]] = []
        for target in self._targets():
            staged = _staging_path(target)
            if not staged.exists():
                continue
            try:
                backup = self._publish(staged, target)
            except OSError as exc:
                self._roll_back(published)
                self.discard()
                raise LinkError(
                    f"Cannot write {target}: {exc}",
                    hint="Check that the output path is a writable file location.",
                ) from exc
            published.append((target, backup))

        for _, backup in published:
            if backup is not None:
                backup.unlink(missing_ok=True)

    def discard(self) -> None:
        """Delete every staged file."""
        for target in self._targets():
            _staging_path(target).unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _targets(self) -> list[Path]:
        targets = [self.js_path]
        if self.source_map_path is not None:
            targets.append(self.source_map_path)
        return targets

    @staticmethod
    def _publish(staged: Path, target: Path) -> Path | None:
        """Rename *staged* onto *target*, keeping any previous file as a backup."""
        backup = None
        if target.is_file():
            backup = _backup_path(target)
            os.replace(target, backup)
        try:
            os.replace(staged, target)
        except OSError:
            if backup is not None:
                os.replace(backup, target)
            raise
        return backup

    @staticmethod
    def _roll_back(published: list[tuple[Path, Path | None]]) -> None:
        for target, backup in reversed(published):
            if backup is None:
                target.unlink(missing_ok=True)
            else:
                os.replace(backup, target)

    @staticmethod
    def _write(target: Path, content: str | bytes) -> None:
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            _staging_path(target).write_bytes(data)
        except OSError as exc:
            raise LinkError(
                f"Cannot write {target}: {exc}",
                hint="Check that the output directory exists and is writable.",
            ) from exc
