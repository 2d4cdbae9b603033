"""ProvisionService — run the provisioning steps in order, stop at the first failure.

INVARIANT: step N never runs (not even its ``check()``) once step N-1
has failed.  Nothing is rolled back: the host is disposable.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import click
import structlog

from docsprov.config.logging import step_context
from docsprov.domain.steps import StepError, StepOutcome, StepStatus
from docsprov.services.result import ServiceError, ServiceResult
from docsprov.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from docsprov.domain.steps import ProvisionContext, ProvisioningStep

log = structlog.get_logger(__name__)


def _echo_stderr(line: str) -> None:
    click.echo(line, err=True)


class ProvisionService:
    """Apply a fixed, ordered list of steps to the host.

    Args:
        context: Collaborators and the environment overlay for this run.
        steps: Steps in execution order.
        echo: Receives one line per step before it runs.  Defaults to
            stderr, in the style of ``set -x``.
    """

    def __init__(
        self,
        context: ProvisionContext,
        steps: Sequence[ProvisioningStep],
        *,
        echo: Callable[[str], None] = _echo_stderr,
    ) -> None:
        self._ctx = context
        self._steps = list(steps)
        self._echo = echo

    @traced
    def run(self) -> ServiceResult:
        """Run every step; on the first failure, stop and report it."""
        outcomes: list[StepOutcome] = []
        for step in self._steps:
            with step_context(step.name), trace_span(step.name) as span:
                outcome = self._run_step(step)
                if span is not None:
                    span.annotate("status", str(outcome.status))
                if not outcome.ok:
                    log.warning(
                        "step.failed",
                        exit_code=outcome.exit_code,
                        error=str(outcome.error or StepError.STEP_FAILED),
                    )
            outcomes.append(outcome)

            if not outcome.ok:
                return ServiceResult(
                    ok=False,
                    op="run",
                    data=self._summary(outcomes, exit_code=outcome.exit_code)
                    | {"failed_step": outcome.name},
                    error=ServiceError(
                        code=str(outcome.error or StepError.STEP_FAILED),
                        message=f"step '{outcome.name}' failed: {outcome.detail}",
                        detail={"step": outcome.name, "exit_code": outcome.exit_code},
                    ),
                )

        exit_code = outcomes[-1].exit_code if outcomes else 0
        return ServiceResult(ok=True, op="run", data=self._summary(outcomes, exit_code=exit_code))

    def plan(self) -> ServiceResult:
        """Report each step and whether its desired state already holds.

        Read-only: only ``check()`` is called, never ``apply()``.
        """
        steps: list[dict[str, Any]] = [
            {
                "name": step.name,
                "command": step.describe(),
                "satisfied": step.check(self._ctx),
            }
            for step in self._steps
        ]
        pending = sum(1 for s in steps if not s["satisfied"])
        return ServiceResult(ok=True, op="plan", data={"steps": steps, "pending": pending})

    def _run_step(self, step: ProvisioningStep) -> StepOutcome:
        if step.check(self._ctx):
            log.info("step.satisfied")
            self._echo(f"# {step.name}: already satisfied")
            return StepOutcome(step.name, StepStatus.SATISFIED)

        self._echo(f"+ {step.describe()}")
        log.debug("step.apply")
        return step.apply(self._ctx)

    @staticmethod
    def _summary(outcomes: list[StepOutcome], *, exit_code: int) -> dict[str, Any]:
        return {
            "exit_code": exit_code,
            "steps": [o.to_dict() for o in outcomes],
        }
