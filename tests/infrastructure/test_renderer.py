"""Tests for script persistence and interpreter execution."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any

import pytest

from rplotctl.infrastructure.renderer import RScriptRenderer


class TestPersist:
    def test_writes_script_with_trailing_newline(self, tmp_path: Path) -> None:
        target = tmp_path / "plot.R"
        RScriptRenderer().persist("par()\nplot(0, 1)", target)
        assert target.read_text(encoding="utf-8") == "par()\nplot(0, 1)\n"

    def test_replaces_existing_content(self, tmp_path: Path) -> None:
        target = tmp_path / "plot.R"
        target.write_text("old content that is longer\n", encoding="utf-8")
        RScriptRenderer().persist("par()", target)
        assert target.read_text(encoding="utf-8") == "par()\n"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "plot.R"
        RScriptRenderer().persist("par()", target)
        assert target.is_file()


class TestExecute:
    def test_invokes_interpreter_with_script(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[list[str], dict[str, Any]]] = []

        def fake_run(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            calls.append((argv, kwargs))
            return subprocess.CompletedProcess(argv, 0, stdout="done\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        execution = RScriptRenderer().execute("Rscript", tmp_path / "plot.R")

        assert execution.output == "done\n"
        assert execution.returncode == 0
        assert execution.ok
        [(argv, kwargs)] = calls
        assert argv == ["Rscript", "-f", str(tmp_path / "plot.R")]
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False

    def test_nonzero_exit_is_logged_not_raised(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def fake_run(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            return subprocess.CompletedProcess(argv, 1, stdout="partial", stderr="Error")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with caplog.at_level(logging.WARNING, logger="rplotctl.infrastructure.renderer"):
            execution = RScriptRenderer().execute("R", tmp_path / "plot.R")

        assert execution.output == "partial"
        assert execution.errors == "Error"
        assert not execution.ok
        assert "exited with status 1" in caplog.text

    def test_missing_interpreter_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            RScriptRenderer().execute(str(tmp_path / "no-such-R"), tmp_path / "plot.R")
