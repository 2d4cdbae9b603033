"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docsprov.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from docsprov.config.settings import ProvisionSettings
    from docsprov.services.provision import ProvisionService
    from docsprov.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The provisioning service is built lazily on first use so ``--help``
    and ``--version`` never touch the host.
    """

    def __init__(self, settings: ProvisionSettings) -> None:
        self.settings = settings
        self._service: ProvisionService | None = None

        from docsprov.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from docsprov.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> ProvisionService:
        """The provisioning service wired to the real host."""
        if self._service is None:
            from docsprov.domain.steps import ProvisionContext, build_steps
            from docsprov.infrastructure.executor import SubprocessExecutor
            from docsprov.infrastructure.filesystem import LocalFilesystem
            from docsprov.services.provision import ProvisionService

            s = self.settings
            context = ProvisionContext(
                executor=SubprocessExecutor(),
                filesystem=LocalFilesystem(),
            )
            steps = build_steps(
                packages=s.packages,
                symlink=s.symlink,
                environment=s.environment,
                docs=s.docs,
            )
            self._service = ProvisionService(context, steps)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with the failed step's code.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)
