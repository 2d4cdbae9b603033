"""Click base classes for docsprov commands.

``ProvCommand`` adds an eager ``--examples`` flag that prints invocation
examples plus where configuration is read from, then exits.
``ProvGroup`` lists subcommands in registration order (``run`` first)
rather than alphabetically.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

from docsprov.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME

_CONFIG_HINT = (
    f"Configuration: ./{CONFIG_FILENAME} (searched upward), ${CONFIG_ENV_VAR}, or -c PATH.\n"
    "Any setting can be overridden with DOCSPROV_<SECTION>__<KEY>."
)


class ProvCommand(click.Command):
    """Click Command that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        click.echo(f"\n{_CONFIG_HINT}")
        ctx.exit(0)


class ProvGroup(click.Group):
    """Click Group whose subcommands default to :class:`ProvCommand`."""

    command_class = ProvCommand

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)
