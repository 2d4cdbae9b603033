"""Subcommand modules for docsprov.

Provides register_commands() which uses deferred imports to keep
``docsprov --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from docsprov.commands.plan import plan
    from docsprov.commands.run import run

    cli.add_command(run)
    cli.add_command(plan)
