"""Tests for the CLI entry point and error boundary (cli/app.py).

The linker backend is replaced by a fake that writes a small JavaScript
file through the real :class:`FileLinkerOutput`; discovery runs on a
real jar under ``tmp_path``.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from scalajsld.cli import exit_codes
from scalajsld.cli.app import cli, main
from scalajsld.core.models import IRFile, LinkConfiguration, ModuleInitializer
from scalajsld.exceptions import InputResolutionError, LinkError
from scalajsld.infra.linker_output import FileLinkerOutput


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _WritingLinker:
    def __init__(self, config: LinkConfiguration, error: Exception | None = None) -> None:
        self.config = config
        self.error = error
        self.ir_files: list[IRFile] = []
        self.module_initializers: list[ModuleInitializer] = []

    async def link(
        self,
        ir_files: Sequence[IRFile],
        module_initializers: Sequence[ModuleInitializer],
        output: FileLinkerOutput,
        logger: logging.Logger,
    ) -> None:
        self.ir_files = list(ir_files)
        self.module_initializers = list(module_initializers)
        output.write_js("// linked\n")
        if self.config.source_map:
            output.write_source_map("{}")
        if self.error is not None:
            raise self.error


def _make_jar(path: Path) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("com/acme/Main$.sjsir", b"ir")
    return path


@pytest.fixture
def linkers() -> list[_WritingLinker]:
    return []


@pytest.fixture
def patched_backend(linkers: list[_WritingLinker]) -> Any:
    def factory(config: LinkConfiguration) -> _WritingLinker:
        linker = _WritingLinker(config)
        linkers.append(linker)
        return linker

    with patch("scalajsld.infra.linker_backend.load_linker", side_effect=factory) as mock:
        yield mock


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMainLink:
    def test_happy_path_writes_output(
        self, tmp_path: Path, patched_backend: MagicMock, linkers: list[_WritingLinker],
    ) -> None:
        jar = _make_jar(tmp_path / "libA.jar")
        out = tmp_path / "out.js"

        code = main([str(jar), "-o", str(out), "-mm", "com.acme.Main.run"])

        assert code == exit_codes.SUCCESS
        assert out.read_text() == "// linked\n"
        linker = linkers[0]
        assert [f.relative_path for f in linker.ir_files] == ["com/acme/Main$.sjsir"]
        assert linker.module_initializers == [ModuleInitializer("com.acme.Main", "run")]
        assert linker.config.optimizer is True

    def test_source_map_written_alongside(
        self, tmp_path: Path, patched_backend: MagicMock,
    ) -> None:
        jar = _make_jar(tmp_path / "lib.jar")
        out = tmp_path / "out.js"
        assert main([str(jar), "-o", str(out), "-s"]) == exit_codes.SUCCESS
        assert (tmp_path / "out.js.map").read_text() == "{}"

    def test_stdlib_is_linked_first(
        self, tmp_path: Path, patched_backend: MagicMock, linkers: list[_WritingLinker],
    ) -> None:
        std = _make_jar(tmp_path / "std.jar")
        lib = _make_jar(tmp_path / "lib.jar")
        main([str(lib), "--stdlib", str(std), "-o", str(tmp_path / "out.js")])
        assert {f.container for f in linkers[0].ir_files} == {std, lib}

    def test_full_opt_config_reaches_backend(
        self, tmp_path: Path, patched_backend: MagicMock, linkers: list[_WritingLinker],
    ) -> None:
        jar = _make_jar(tmp_path / "lib.jar")
        main([str(jar), "-u", "-o", str(tmp_path / "out.js")])
        config = linkers[0].config
        assert config.closure_compiler is True
        assert config.semantics.production_mode is True

    def test_missing_classpath_entry_fails_before_linking(
        self, tmp_path: Path, patched_backend: MagicMock, linkers: list[_WritingLinker],
    ) -> None:
        out = tmp_path / "out.js"
        with pytest.raises(InputResolutionError):
            main([str(tmp_path / "missing.jar"), "-o", str(out)])
        assert linkers[0].ir_files == []
        assert not out.exists()

    def test_link_error_leaves_no_output(self, tmp_path: Path) -> None:
        jar = _make_jar(tmp_path / "lib.jar")
        out = tmp_path / "out.js"
        with patch(
            "scalajsld.infra.linker_backend.load_linker",
            side_effect=lambda config: _WritingLinker(config, LinkError("unresolved")),
        ):
            with pytest.raises(LinkError, match="unresolved"):
                main([str(jar), "-o", str(out)])
        assert list(tmp_path.iterdir()) == [jar]

    def test_usage_error_never_loads_backend(self, patched_backend: MagicMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["lib.jar", "-k", "Bogus", "-o", "out.js"])
        assert exc_info.value.code == exit_codes.USAGE_ERROR
        patched_backend.assert_not_called()

    def test_quiet_sets_logger_level(
        self, tmp_path: Path, patched_backend: MagicMock,
    ) -> None:
        jar = _make_jar(tmp_path / "lib.jar")
        main([str(jar), "-qq", "-o", str(tmp_path / "out.js")])
        assert logging.getLogger("scalajsld").level == logging.ERROR


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_success_exit_code(self) -> None:
        with patch("scalajsld.cli.app.main", return_value=exit_codes.SUCCESS):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.SUCCESS

    def test_known_error_prints_message_and_hint(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        error = InputResolutionError("Classpath entry x.jar does not exist", hint="Check [paths].")
        with patch("scalajsld.cli.app.main", side_effect=error):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Classpath entry x.jar does not exist" in err
        assert "Check [paths]." in err

    def test_keyboard_interrupt(self) -> None:
        with patch("scalajsld.cli.app.main", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("scalajsld.cli.app.main", side_effect=ValueError("odd")):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        assert "ValueError: odd" in capsys.readouterr().err

    def test_usage_exit_passes_through(self) -> None:
        with patch("scalajsld.cli.app.main", side_effect=SystemExit(2)):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.USAGE_ERROR


class TestHandleLink:
    def test_missing_output_raises_usage_error(self, patched_backend: MagicMock) -> None:
        from scalajsld.cli.app import _handle_link
        from scalajsld.core.models import OptionModel
        from scalajsld.exceptions import UsageError

        with pytest.raises(UsageError, match="-o/--output"):
            _handle_link(OptionModel())
        patched_backend.assert_not_called()
