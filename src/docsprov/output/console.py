"""Rich Console factory and theme for docsprov output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes, most CI runners) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DOCSPROV_THEME = Theme(
    {
        "prov.ok": "bold green",
        "prov.error": "bold red",
        "prov.warning": "bold yellow",
        "prov.op": "bold cyan",
        "prov.key": "dim",
        "prov.step": "bold",
        "prov.command": "dim",
        "prov.status.applied": "green",
        "prov.status.satisfied": "blue",
        "prov.status.failed": "red",
        "prov.status.pending": "yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "applied": "prov.status.applied",
    "satisfied": "prov.status.satisfied",
    "failed": "prov.status.failed",
    "pending": "prov.status.pending",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DOCSPROV_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a step status."""
    return _STATUS_STYLES.get(status, "")
