"""Command execution — the one seam through which docsprov touches the host.

Every external interaction (package manager, ``ln``, the documentation
generator) goes through a :class:`CommandExecutor`.  Production code uses
:class:`SubprocessExecutor`; tests substitute a recording fake.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Shell conventions: found but not executable, not found, killed by signal N.
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


@dataclass(frozen=True)
class CommandOutcome:
    """Exit status and (optionally captured) output of one command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


class CommandExecutor(Protocol):
    """Run a command synchronously and report its status."""

    def execute(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> CommandOutcome: ...


class SubprocessExecutor:
    """Run commands with :func:`subprocess.run`.

    *env* is an overlay: it is merged over the current process environment
    rather than replacing it, so ``PATH`` and friends survive.

    With ``capture=False`` (the default) the child inherits stdout/stderr
    and its raw output streams straight into the CI log.
    """

    def __init__(self, *, capture: bool = False) -> None:
        self._capture = capture

    def execute(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> CommandOutcome:
        args = tuple(argv)
        child_env = {**os.environ, **env} if env else None
        logger.debug("exec %s", shlex.join(args))
        try:
            proc = subprocess.run(
                args,
                cwd=cwd,
                env=child_env,
                capture_output=self._capture,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.debug("exec failed: %s", exc)
            return CommandOutcome(args, _exec_error_status(exc), stderr=str(exc))
        return CommandOutcome(
            args,
            _shell_status(proc.returncode),
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


def _shell_status(returncode: int) -> int:
    """Report death by signal N as 128+N, the way a shell would."""
    if returncode < 0:
        return EXIT_SIGNAL_BASE - returncode
    return returncode


def _exec_error_status(exc: OSError) -> int:
    if isinstance(exc, FileNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(exc, PermissionError):
        return EXIT_NOT_EXECUTABLE
    return 1
