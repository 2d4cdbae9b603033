"""Tests for Rich renderers and the format_result dispatcher."""

from __future__ import annotations

import json

from docsprov.output.formatters import OutputSettings, format_result
from docsprov.output.renderers import _OP_RENDERERS, render_quiet, render_result
from docsprov.services.result import ServiceError, ServiceResult

RUN_OK = ServiceResult(
    ok=True,
    op="run",
    data={
        "exit_code": 0,
        "steps": [
            {"name": "refresh-index", "status": "applied", "exit_code": 0},
            {"name": "compat-symlink", "status": "satisfied", "exit_code": 0},
        ],
    },
)

RUN_FAILED = ServiceResult(
    ok=False,
    op="run",
    data={
        "exit_code": 100,
        "failed_step": "install-toolchain",
        "steps": [
            {"name": "refresh-index", "status": "applied", "exit_code": 0},
            {
                "name": "install-toolchain",
                "status": "failed",
                "exit_code": 100,
                "detail": "E: Unable to locate package clang",
            },
        ],
    },
    error=ServiceError(
        code="STEP_FAILED",
        message="step 'install-toolchain' failed: E: Unable to locate package clang",
        detail={"step": "install-toolchain", "exit_code": 100},
    ),
)

PLAN = ServiceResult(
    ok=True,
    op="plan",
    data={
        "pending": 1,
        "steps": [
            {"name": "refresh-index", "command": "sudo apt-get update", "satisfied": False},
            {
                "name": "compat-symlink",
                "command": "sudo ln -s libclang.so.1 /usr/lib/llvm-10/lib/libclang.so",
                "satisfied": True,
            },
        ],
    },
)


class TestRenderRun:
    def test_success_table(self) -> None:
        out = render_result(RUN_OK)
        assert out.startswith("OK")
        assert "refresh-index" in out
        assert "satisfied" in out
        assert "exit_code: 0" in out

    def test_failure_shows_steps(self) -> None:
        out = render_result(RUN_FAILED)
        assert out.startswith("ERROR")
        assert "install-toolchain" in out
        assert "100" in out

    def test_failure_detail_only_when_verbose(self) -> None:
        assert "Unable to locate package clang" in render_result(RUN_FAILED)
        assert "detail:" not in render_result(RUN_FAILED)
        assert "detail:" in render_result(RUN_FAILED, verbose=True)

    def test_verbose_renders_telemetry(self) -> None:
        result = RUN_OK.model_copy(
            update={
                "meta": {
                    "telemetry": {
                        "name": "ProvisionService.run",
                        "duration_ms": 12.5,
                        "children": [
                            {
                                "name": "build-docs",
                                "duration_ms": 11.0,
                                "annotations": {"status": "applied"},
                            }
                        ],
                    }
                }
            }
        )
        out = render_result(result, verbose=True)
        assert "ProvisionService.run" in out
        assert "build-docs" in out
        assert "status=applied" in out
        assert "ProvisionService.run" not in render_result(result)


class TestRenderPlan:
    def test_plan_table(self) -> None:
        out = render_result(PLAN)
        assert "refresh-index" in out
        assert "pending" in out
        assert "satisfied" in out
        assert "sudo apt-get update" in out


class TestDispatchAndQuiet:
    def test_every_service_op_has_a_renderer(self) -> None:
        assert set(_OP_RENDERERS) == {"run", "plan"}

    def test_quiet(self) -> None:
        assert render_quiet(RUN_OK) == "OK: run"
        assert render_quiet(RUN_FAILED).startswith("ERROR: run")


class TestFormatResult:
    def test_json_wins(self) -> None:
        out = format_result(RUN_FAILED, settings=OutputSettings(json_output=True, quiet=True))
        data = json.loads(out)
        assert data["ok"] is False
        assert data["error"]["code"] == "STEP_FAILED"
        assert data["data"]["failed_step"] == "install-toolchain"

    def test_quiet(self) -> None:
        assert format_result(RUN_OK, settings=OutputSettings(quiet=True)) == "OK: run"

    def test_default_is_rich(self) -> None:
        assert "refresh-index" in format_result(RUN_OK)
