"""Tests for the staged output sink (infra/linker_output.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from scalajsld.exceptions import LinkError
from scalajsld.infra.linker_output import FileLinkerOutput


class TestForPath:
    def test_without_source_map(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        assert output.source_map_path is None
        assert output.source_map_uri is None

    def test_with_source_map(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js", source_map=True)
        assert output.source_map_path == tmp_path / "out.js.map"

    def test_uris(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js", source_map=True)
        assert output.js_file_uri == (tmp_path / "out.js").absolute().as_uri()
        assert output.source_map_uri == (tmp_path / "out.js.map").absolute().as_uri()


class TestCommitAndDiscard:
    def test_nothing_visible_before_commit(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        output.write_js("var x = 1;")
        assert not (tmp_path / "out.js").exists()

    def test_commit_publishes(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js", source_map=True)
        output.write_js("var x = 1;")
        output.write_source_map(b"{}")
        output.commit()
        assert (tmp_path / "out.js").read_text() == "var x = 1;"
        assert (tmp_path / "out.js.map").read_bytes() == b"{}"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.js", "out.js.map"]

    def test_commit_replaces_previous_output(self, tmp_path: Path) -> None:
        (tmp_path / "out.js").write_text("old")
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        output.write_js("new")
        output.commit()
        assert (tmp_path / "out.js").read_text() == "new"

    def test_discard_leaves_no_files(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js", source_map=True)
        output.write_js("partial")
        output.discard()
        assert list(tmp_path.iterdir()) == []

    def test_discard_keeps_previous_output(self, tmp_path: Path) -> None:
        (tmp_path / "out.js").write_text("old")
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        output.write_js("partial")
        output.discard()
        assert (tmp_path / "out.js").read_text() == "old"

    def test_discard_without_writes(self, tmp_path: Path) -> None:
        FileLinkerOutput.for_path(tmp_path / "out.js").discard()


class TestWriteErrors:
    def test_source_map_not_requested(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        with pytest.raises(LinkError, match="No source map"):
            output.write_source_map("{}")

    def test_missing_directory(self, tmp_path: Path) -> None:
        output = FileLinkerOutput.for_path(tmp_path / "nope" / "out.js")
        with pytest.raises(LinkError) as exc_info:
            output.write_js("x")
        assert exc_info.value.hint is not None


class TestCommitFailure:
    def _blocked_map_output(self, tmp_path: Path) -> FileLinkerOutput:
        output = FileLinkerOutput.for_path(tmp_path / "out.js", source_map=True)
        output.write_js("var x = 1;")
        output.write_source_map("{}")
        blocker = tmp_path / "out.js.map"
        blocker.mkdir()
        (blocker / "keep.txt").write_text("x")
        return output

    def test_failed_second_rename_publishes_nothing(self, tmp_path: Path) -> None:
        output = self._blocked_map_output(tmp_path)
        with pytest.raises(LinkError, match="out.js.map"):
            output.commit()
        assert not (tmp_path / "out.js").exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.js.map"]

    def test_failed_commit_restores_previous_output(self, tmp_path: Path) -> None:
        (tmp_path / "out.js").write_text("old")
        output = self._blocked_map_output(tmp_path)
        with pytest.raises(LinkError):
            output.commit()
        assert (tmp_path / "out.js").read_text() == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.js", "out.js.map"]

    def test_successful_commit_removes_backups(self, tmp_path: Path) -> None:
        (tmp_path / "out.js").write_text("old")
        output = FileLinkerOutput.for_path(tmp_path / "out.js")
        output.write_js("new")
        output.commit()
        assert [p.name for p in tmp_path.iterdir()] == ["out.js"]
