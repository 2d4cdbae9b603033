"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from docsprov.config.logging import configure_logging, step_context


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("docsprov").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("docsprov").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("docsprov.test")
        log.warning("json test", step="compat-symlink")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["step"] == "compat-symlink"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "docsprov.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("docsprov.services.provision").debug("Applying step build-docs")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Applying step build-docs"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "docsprov.services.provision"

    def test_nothing_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("docsprov").warning("to stderr")
        assert capfd.readouterr().out == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_step_context_binds_and_unbinds(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("docsprov.test")
        with step_context("compat-symlink"):
            log.info("inside")
        log.info("outside")

        inside, outside = (json.loads(line) for line in capfd.readouterr().err.splitlines())
        assert inside["step"] == "compat-symlink"
        assert "step" not in outside
