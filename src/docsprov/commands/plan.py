"""Command: show the provisioning steps without running them."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docsprov.commands._base import ProvCommand

if TYPE_CHECKING:
    from docsprov.commands._context import AppContext


@click.command(
    cls=ProvCommand,
    examples="""\
  docsprov plan
  docsprov --json plan""",
)
@click.pass_obj
def plan(app: AppContext) -> None:
    """List the steps in order and whether each is already satisfied."""
    app.emit(app.service.plan())
