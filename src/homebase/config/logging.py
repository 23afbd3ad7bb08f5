"""Logging setup: stdlib loggers rendered through structlog on stderr.

Library code logs with ``logging.getLogger(__name__)`` (or a structlog
logger); this module only decides levels and rendering:

- ``-v`` lowers the ``homebase`` logger to DEBUG, ``-q`` raises it to ERROR
- ``--log-json`` swaps the console renderer for JSON lines

stdout is reserved for command output.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "homebase"

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def level_for(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``homebase`` logger. ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Install a single stderr handler on the root logger.

    Safe to call repeatedly; each call replaces the previous handler.
    Third-party loggers stay at WARNING.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_SHARED_PROCESSORS),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(level_for(verbose=verbose, quiet=quiet))
