"""Tests for the plan command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from docsprov.cli import cli
from tests.fakes import FakeExecutor


@pytest.fixture
def project(
    tmp_path: Path,
    lib_dir: Path,
    executor: FakeExecutor,
    monkeypatch: pytest.MonkeyPatch,
    _isolated_config: None,
) -> Path:
    (tmp_path / "docsprov.toml").write_text(
        f'[symlink]\nlib_dir = "{lib_dir}"\n', encoding="utf-8"
    )
    monkeypatch.setattr(
        "docsprov.infrastructure.executor.SubprocessExecutor", lambda: executor
    )
    return tmp_path


@pytest.mark.usefixtures("project")
class TestPlanCommand:
    def test_plan_runs_nothing(self, cli_runner: CliRunner, executor: FakeExecutor) -> None:
        result = cli_runner.invoke(cli, ["plan"])
        assert result.exit_code == 0, result.output
        assert executor.calls == []
        assert "refresh-index" in result.stdout
        assert "build-docs" in result.stdout

    def test_plan_json(self, cli_runner: CliRunner, lib_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "plan"])
        data = json.loads(result.stdout)
        assert data["op"] == "plan"
        assert data["data"]["pending"] == 5
        commands = [s["command"] for s in data["data"]["steps"]]
        assert commands[2] == f"sudo ln -s libclang.so.1 {lib_dir / 'libclang.so'}"

    def test_plan_sees_existing_link(
        self, cli_runner: CliRunner, installed_lib: Path, lib_dir: Path
    ) -> None:
        (lib_dir / "libclang.so").symlink_to("libclang.so.1")
        result = cli_runner.invoke(cli, ["--json", "plan"])
        data = json.loads(result.stdout)
        assert data["data"]["pending"] == 4
