"""Provisioning steps — the ordered, fail-fast units of host mutation.

Each step exposes ``check(ctx)`` (is the desired state already in place?)
and ``apply(ctx)`` (make it so).  Steps never raise for an expected
failure; they return a :class:`StepOutcome` carrying the exit code that
the whole run must propagate.

The fixed sequence is built by :func:`build_steps`:

1. refresh the package index
2. install the native toolchain
3. link the unversioned libclang name to the versioned file
4. export the diagnostic environment overlay
5. run the documentation generator
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docsprov.config.models import (
        DocsConfig,
        EnvironmentConfig,
        PackagesConfig,
        SymlinkConfig,
    )
    from docsprov.infrastructure.executor import CommandExecutor, CommandOutcome
    from docsprov.infrastructure.filesystem import Filesystem


class StepStatus(StrEnum):
    """Terminal state of a single step."""

    APPLIED = "applied"
    SATISFIED = "satisfied"
    FAILED = "failed"


class StepError(StrEnum):
    """Error codes surfaced in ``ServiceError.code`` for a failed step."""

    STEP_FAILED = "STEP_FAILED"
    LINK_TARGET_MISSING = "LINK_TARGET_MISSING"
    LINK_CONFLICT = "LINK_CONFLICT"


@dataclass
class ProvisionContext:
    """Explicit state threaded through the steps of one run.

    ``env`` is the environment overlay.  It starts empty, is filled by
    :class:`ExportEnvironmentStep`, and is passed only to commands that
    run after that step.
    """

    executor: CommandExecutor
    filesystem: Filesystem
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StepOutcome:
    name: str
    status: StepStatus
    exit_code: int = 0
    detail: str = ""
    error: StepError | None = None
    commands: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is not StepStatus.FAILED

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {
            "name": self.name,
            "status": str(self.status),
            "exit_code": self.exit_code,
        }
        if self.detail:
            result["detail"] = self.detail
        if self.error is not None:
            result["error"] = str(self.error)
        if self.commands:
            result["commands"] = list(self.commands)
        return result


class ProvisioningStep:
    """Base class for a provisioning step.

    Subclasses set :attr:`name` and implement :meth:`describe` and
    :meth:`apply`.  The default :meth:`check` returns False so the step
    always runs.
    """

    name: str = "step"

    def describe(self) -> str:
        """Return the line echoed to the CI log before the step runs."""
        raise NotImplementedError

    def check(self, ctx: ProvisionContext) -> bool:
        return False

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        raise NotImplementedError

    def _from_command(self, outcome: CommandOutcome, *, detail: str = "") -> StepOutcome:
        if outcome.ok:
            return StepOutcome(
                self.name,
                StepStatus.APPLIED,
                detail=detail,
                commands=(outcome.command_line,),
            )
        return StepOutcome(
            self.name,
            StepStatus.FAILED,
            exit_code=outcome.returncode,
            detail=outcome.stderr.strip() or f"command exited with status {outcome.returncode}",
            error=StepError.STEP_FAILED,
            commands=(outcome.command_line,),
        )


def _privileged(argv: Sequence[str], sudo: bool) -> list[str]:
    return ["sudo", *argv] if sudo else list(argv)


# --- Package manager ---


class RefreshIndexStep(ProvisioningStep):
    """Refresh the system package manager's catalog."""

    name = "refresh-index"

    def __init__(self, config: PackagesConfig) -> None:
        self._config = config

    @property
    def argv(self) -> list[str]:
        return _privileged([self._config.manager, "update"], self._config.sudo)

    def describe(self) -> str:
        return shlex.join(self.argv)

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        return self._from_command(ctx.executor.execute(self.argv))


class InstallPackagesStep(ProvisioningStep):
    """Install the native toolchain packages non-interactively."""

    name = "install-toolchain"

    def __init__(self, config: PackagesConfig) -> None:
        self._config = config

    @property
    def argv(self) -> list[str]:
        return _privileged(
            [self._config.manager, "-y", "install", *self._config.names],
            self._config.sudo,
        )

    def describe(self) -> str:
        return shlex.join(self.argv)

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        return self._from_command(
            ctx.executor.execute(self.argv),
            detail=", ".join(self._config.names),
        )


# --- Compatibility symlink ---


class CompatSymlinkStep(ProvisioningStep):
    """Alias the unversioned library name to the installed versioned file.

    clang-sys only searches for ``libclang.so`` while the distro package
    ships ``libclang.so.1``.  The target must already exist: a missing
    target means the toolchain layout drifted, and the run must stop here
    rather than leave a dangling link for the build to trip over later.

    Re-runs: a destination that is already a symlink with the configured
    target is reported as satisfied.  Anything else at the destination is
    a conflict.
    """

    name = "compat-symlink"

    def __init__(self, config: SymlinkConfig) -> None:
        self._config = config

    @property
    def argv(self) -> list[str]:
        return _privileged(
            ["ln", "-s", self._config.target, str(self._config.link_path)],
            self._config.sudo,
        )

    def describe(self) -> str:
        return shlex.join(self.argv)

    def check(self, ctx: ProvisionContext) -> bool:
        link = self._config.link_path
        fs = ctx.filesystem
        return (
            fs.is_symlink(link)
            and fs.readlink(link) == self._config.target
            and fs.exists(link)
        )

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        fs = ctx.filesystem
        link = self._config.link_path
        target = self._config.target_path

        if not fs.exists(target):
            return StepOutcome(
                self.name,
                StepStatus.FAILED,
                exit_code=1,
                detail=f"link target {target} does not exist",
                error=StepError.LINK_TARGET_MISSING,
            )
        if fs.is_symlink(link) or fs.exists(link):
            return StepOutcome(
                self.name,
                StepStatus.FAILED,
                exit_code=1,
                detail=f"{link} already exists and is not a link to {self._config.target}",
                error=StepError.LINK_CONFLICT,
            )
        return self._from_command(
            ctx.executor.execute(self.argv),
            detail=f"{link} -> {self._config.target}",
        )


# --- Environment overlay ---


class ExportEnvironmentStep(ProvisioningStep):
    """Add the diagnostic variables to the run's environment overlay."""

    name = "export-environment"

    def __init__(self, config: EnvironmentConfig) -> None:
        self._config = config

    def describe(self) -> str:
        pairs = " ".join(f"{k}={shlex.quote(v)}" for k, v in self._config.variables.items())
        return f"export {pairs}"

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        ctx.env.update(self._config.variables)
        return StepOutcome(
            self.name,
            StepStatus.APPLIED,
            detail=", ".join(sorted(self._config.variables)),
        )


# --- Documentation generator ---


class BuildDocsStep(ProvisioningStep):
    """Run the documentation generator with the overlay in effect."""

    name = "build-docs"

    def __init__(self, config: DocsConfig) -> None:
        self._config = config

    def describe(self) -> str:
        return shlex.join(self._config.command)

    def apply(self, ctx: ProvisionContext) -> StepOutcome:
        outcome = ctx.executor.execute(
            self._config.command,
            env=dict(ctx.env),
            cwd=self._config.workdir,
        )
        return self._from_command(outcome)


def build_steps(
    *,
    packages: PackagesConfig,
    symlink: SymlinkConfig,
    environment: EnvironmentConfig,
    docs: DocsConfig,
) -> list[ProvisioningStep]:
    """Return the fixed provisioning sequence in execution order."""
    return [
        RefreshIndexStep(packages),
        InstallPackagesStep(packages),
        CompatSymlinkStep(symlink),
        ExportEnvironmentStep(environment),
        BuildDocsStep(docs),
    ]
