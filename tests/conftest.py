"""Shared pytest fixtures and test helpers for rplotctl tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from rplotctl.infrastructure.renderer import Execution


class FakeRenderer:
    """Renderer that records calls instead of touching disk or spawning R."""

    def __init__(self, output: str = "R output", returncode: int = 0, errors: str = "") -> None:
        self.output = output
        self.returncode = returncode
        self.errors = errors
        self.persisted: list[tuple[str, Path]] = []
        self.executed: list[tuple[str, Path]] = []

    def persist(self, text: str, path: Path) -> None:
        self.persisted.append((text, path))

    def execute(self, interpreter_path: str, script_path: Path) -> Execution:
        self.executed.append((interpreter_path, script_path))
        return Execution(self.output, self.returncode, self.errors)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no rplotctl config in scope."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RPLOTCTL_CONFIG", raising=False)


@pytest.fixture
def write_chart(tmp_path: Path):
    """Write a chart description dict to ``tmp_path`` as JSON; return the path."""

    def _write(data: dict[str, Any], name: str = "chart.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def line_chart():
    """Factory for a minimal one-series line chart description."""

    def _chart(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": "line",
            "options": {"path": "plot1.bmp", "type": "bmp"},
            "series": [{"y": [1, 3, 2, 5, 4]}],
        }
        data.update(overrides)
        return data

    return _chart
