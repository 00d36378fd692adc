"""structlog setup for applications embedding shapekit.

The library never configures logging on import. Applications call
:func:`configure_logging` directly, or :func:`configure_from_config`
with the ``[logging]`` section of their settings.

Output goes to stderr (or a caller-supplied stream), either as
console-formatted lines or as JSON lines.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from shapekit.config.models import LoggingConfig

LOGGER_NAME = "shapekit"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib ``shapekit.*`` records to one handler.

    Args:
        verbose: DEBUG for the ``shapekit`` logger; WARNING otherwise.
        log_json: Render JSON lines instead of console output.
        stream: Destination stream, stderr by default.
    """
    out = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    # Replace, never stack, handlers on repeated calls.
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_from_config(config: LoggingConfig, *, stream: TextIO | None = None) -> None:
    """Apply a ``[logging]`` settings section."""
    configure_logging(verbose=config.verbose, log_json=config.log_json, stream=stream)
