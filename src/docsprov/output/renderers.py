"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from docsprov.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from docsprov.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="prov.ok")
    op = Text(f"  {result.op}", style="prov.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="prov.key")
    console.print(k, Text(str(value)), end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    # Package installs and doc builds are slow; flag only the outliers.
    if duration > 60_000:
        style = "bold red"
    elif duration > 10_000:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>10.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _step_table(steps: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table of step outcomes."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Step", style="prov.step", no_wrap=True)
    table.add_column("Status")
    table.add_column("Exit", justify="right")
    if verbose:
        table.add_column("Detail", style="dim")

    for step in steps:
        status = str(step.get("status", ""))
        style = style_for_status(status)
        row: list[Any] = [
            str(step.get("name", "")),
            Text(status, style=style) if style else status,
            str(step.get("exit_code", "")),
        ]
        if verbose:
            row.append(str(step.get("detail", "")))
        table.add_row(*row)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="prov.error")
    op = Text(f"  {result.op}", style="prov.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    steps = result.data.get("steps")
    if steps:
        console.print(_step_table(steps, verbose=verbose))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
    if verbose:
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a completed provisioning run."""
    _status_line(console, result)
    console.print(_step_table(result.data.get("steps", []), verbose=verbose))
    _field(console, "exit_code", result.data.get("exit_code", 0))
    if verbose:
        _render_meta(console, result)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the ordered step list with each step's check() result."""
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Step", style="prov.step", no_wrap=True)
    table.add_column("State")
    table.add_column("Command", style="prov.command")
    for i, step in enumerate(result.data.get("steps", []), start=1):
        state = "satisfied" if step.get("satisfied") else "pending"
        table.add_row(
            str(i),
            str(step.get("name", "")),
            Text(state, style=style_for_status(state)),
            str(step.get("command", "")),
        )
    console.print(table)
    _field(console, "pending", result.data.get("pending", 0))


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "run": _render_run,
    "plan": _render_plan,
}
