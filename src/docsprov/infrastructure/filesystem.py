"""Read-only filesystem probes used by step ``check()`` methods.

Mutations (link creation) go through the command executor so they can
run with elevated privilege; only inspection lives here.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class Filesystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_symlink(self, path: Path) -> bool: ...

    def readlink(self, path: Path) -> str: ...


class LocalFilesystem:
    """:class:`Filesystem` backed by the real host filesystem."""

    def exists(self, path: Path) -> bool:
        # Follows symlinks: a dangling link does not "exist".
        return path.exists()

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def readlink(self, path: Path) -> str:
        return os.readlink(path)
