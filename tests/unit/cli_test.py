"""Tests for the versync command line."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from versync import __version__
from versync.cli.app import app
from versync.core.runner import RunnerOptions
from versync.errors import InconsistentVersionsError

runner = CliRunner()


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flags(flag: str) -> None:
    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "--bump" in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_passes_options_to_runner() -> None:
    captured: list[RunnerOptions] = []

    class _FakeRunner:
        def __init__(self, options: RunnerOptions) -> None:
            captured.append(options)
            self.run = AsyncMock()

    with patch("versync.cli.sync.Runner", _FakeRunner):
        result = runner.invoke(app, ["-b", "minor", "-s", "a.js", "--source", "b.ts", "--tag"])

    assert result.exit_code == 0
    options = captured[0]
    assert options.bump == "minor"
    assert list(options.sources) == ["a.js", "b.ts"]
    assert options.tag is True
    assert options.add is False


def test_tag_requires_bump() -> None:
    result = runner.invoke(app, ["--tag"])
    assert result.exit_code == 1


def test_errors_exit_with_code_1() -> None:
    class _FailingRunner:
        def __init__(self, options: RunnerOptions) -> None:
            self.run = AsyncMock(side_effect=InconsistentVersionsError("Version numbers are inconsistent"))

    with patch("versync.cli.sync.Runner", _FailingRunner):
        result = runner.invoke(app, [])

    assert result.exit_code == 1


def test_verifies_fixture_package(workdir: Path) -> None:
    result = runner.invoke(app, ["-s", "es6-export.js"])
    # package.json is at 0.0.1, es6-export.js at 0.0.7
    assert result.exit_code == 1


def test_bumps_fixture_package(workdir: Path) -> None:
    result = runner.invoke(app, ["-s", "tsmodule.ts", "-b", "patch"])
    assert result.exit_code == 0
    assert "0.0.2" in result.output
    assert 'export const version = "0.0.2";' in (workdir / "tsmodule.ts").read_text(encoding="utf-8")
