"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, docsprov.toml only contains
overrides.  With no config file at all the provisioner reproduces the
stock CI sequence: refresh apt, install clang, link libclang, build docs.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- docsprov.toml sections ---


class PackagesConfig(BaseModel):
    """[packages] section."""

    model_config = {"frozen": True}

    manager: str = "apt-get"
    names: list[str] = Field(default_factory=lambda: ["clang"])
    sudo: bool = True


class SymlinkConfig(BaseModel):
    """[symlink] section.

    The link is created at ``lib_dir / link_name`` and points at *target*.
    A relative *target* is resolved against *lib_dir*, the same way the
    kernel resolves a relative symlink.
    """

    model_config = {"frozen": True}

    lib_dir: Path = Path("/usr/lib/llvm-10/lib")
    link_name: str = "libclang.so"
    target: str = "libclang.so.1"
    sudo: bool = True

    @property
    def link_path(self) -> Path:
        return self.lib_dir / self.link_name

    @property
    def target_path(self) -> Path:
        return self.lib_dir / self.target


class EnvironmentConfig(BaseModel):
    """[environment] section."""

    model_config = {"frozen": True}

    variables: dict[str, str] = Field(
        default_factory=lambda: {"RUST_BACKTRACE": "full", "DOCS_RS": "1"}
    )


class DocsConfig(BaseModel):
    """[docs] section."""

    model_config = {"frozen": True}

    command: list[str] = Field(default_factory=lambda: ["cargo", "doc", "-vv"])
    workdir: Path | None = None
