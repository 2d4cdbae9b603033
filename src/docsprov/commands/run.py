"""Command: provision the host and build the documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docsprov.commands._base import ProvCommand

if TYPE_CHECKING:
    from docsprov.commands._context import AppContext


@click.command(
    cls=ProvCommand,
    examples="""\
  docsprov
  docsprov run
  docsprov -v run
  docsprov --log-json --json run
  DOCSPROV_SYMLINK__LIB_DIR=/usr/lib/llvm-14/lib docsprov run""",
)
@click.pass_obj
def run(app: AppContext) -> None:
    """Refresh packages, install clang, link libclang, and build the docs.

    Stops at the first failing step and exits with its status.
    """
    app.emit(app.service.run())
