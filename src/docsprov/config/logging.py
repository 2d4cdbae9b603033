"""structlog configuration for docsprov.

Log records share stderr with the ``+ command`` echo lines and the raw
output of apt, ln and cargo, so every record carries the provisioning
step it was emitted under (bound by the runner via :func:`step_context`).

Two output modes:
- Human (default): console renderer, colors only on a TTY
- JSON (--log-json): one JSON object per line, for log shippers
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager

import structlog

LOGGER_NAME = "docsprov"


@contextmanager
def step_context(step: str) -> Generator[None]:
    """Bind *step* to every log record emitted inside the block."""
    with structlog.contextvars.bound_contextvars(step=step):
        yield


def _shared_processors(*, log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(structlog.processors.UnicodeDecoder())
    return processors


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route docsprov logging to stderr.

    Args:
        verbose: Log docsprov at DEBUG (each exec'd command, spans).
            Otherwise only step failures and other warnings show.
        log_json: Use JSON renderer instead of console renderer.
    """
    shared = _shared_processors(log_json=log_json)
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    # Replace, never stack: the CLI may configure more than once per process.
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
