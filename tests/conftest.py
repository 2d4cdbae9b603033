"""Shared pytest fixtures for docsprov tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from docsprov.config.models import SymlinkConfig
from docsprov.domain.steps import ProvisionContext
from docsprov.infrastructure.filesystem import LocalFilesystem
from docsprov.services.telemetry import _current_span, disable_telemetry
from tests.fakes import FakeExecutor


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def lib_dir(tmp_path: Path) -> Path:
    """Stand-in for the toolchain's library directory."""
    path = tmp_path / "llvm" / "lib"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def installed_lib(lib_dir: Path) -> Path:
    """The versioned library file the toolchain package ships."""
    lib = lib_dir / "libclang.so.1"
    lib.write_bytes(b"\x7fELF")
    return lib


@pytest.fixture
def symlink_config(lib_dir: Path) -> SymlinkConfig:
    return SymlinkConfig(lib_dir=lib_dir, sudo=False)


@pytest.fixture
def context(executor: FakeExecutor) -> ProvisionContext:
    return ProvisionContext(executor=executor, filesystem=LocalFilesystem())


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no docsprov.toml or DOCSPROV_* vars in reach."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOCSPROV_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Verbose CLI runs enable telemetry; never leak it into other tests."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    prov = logging.getLogger("docsprov")
    prov_level = prov.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    prov.setLevel(prov_level)
