"""Root CLI group for docsprov with global flags and command registration."""

from __future__ import annotations

import click

from docsprov import __version__
from docsprov.commands import register_commands
from docsprov.commands._base import ProvGroup
from docsprov.commands._context import AppContext
from docsprov.config.settings import ProvisionSettings


@click.group(cls=ProvGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="docsprov")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """docsprov — prepare a CI host and build the API documentation.

    With no subcommand, runs the full provisioning sequence.
    """
    ctx.ensure_object(dict)
    settings = ProvisionSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from docsprov.commands.run import run

        ctx.invoke(run)


register_commands(cli)
