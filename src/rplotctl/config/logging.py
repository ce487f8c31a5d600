"""structlog configuration for rplotctl.

Everything goes to stderr so stdout stays clean for generated scripts and
interpreter output. Human mode uses structlog's console renderer;
``--log-json`` writes one JSON object per line.

Library modules log through ``logging.getLogger(__name__)``. Those records
run through the same processor chain as structlog loggers, including the
context bound by :func:`bind_chart`, so an interpreter warning names the
chart file it came from.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

PACKAGE_LOGGER = "rplotctl"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging to one stderr handler.

    Context bound by an earlier invocation is cleared. Third-party loggers
    stay at WARNING; only the ``rplotctl`` tree follows *verbose*.

    Args:
        verbose: DEBUG for ``rplotctl`` loggers instead of WARNING.
        log_json: JSON lines instead of the console renderer.
    """
    structlog.contextvars.clear_contextvars()
    shared = _shared_processors()

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
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_chart(chart_file: str | Path, **fields: Any) -> None:
    """Attach the chart being processed to every later log record."""
    structlog.contextvars.bind_contextvars(chart=str(chart_file), **fields)
