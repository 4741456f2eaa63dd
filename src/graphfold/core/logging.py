# src/graphfold/core/logging.py
"""Structured logging for graphfold.

graphfold is a library, so it never configures the root logger or
structlog's global defaults. Engine modules get their loggers from
get_logger(), which renders structlog events into ordinary stdlib records
(event name as the message, key/value pairs as ``extra``). Those records
reach whatever handlers the application has installed.

configure_logging() is an opt-in convenience: it attaches one structured
handler (console or JSON) to the ``graphfold`` logger only.

The engine only logs at DEBUG (pass boundaries, search sizes) and WARNING
(visitor failures); nothing is emitted per visited node.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from graphfold.core.config import LoggingSettings

PACKAGE_LOGGER = "graphfold"

# Applied to records as the handler formats them, structlog or not.
_PRE_CHAIN: tuple[Any, ...] = (
    structlog.stdlib.ExtraAdder(),
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
)


class _StructuredHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Handler installed by configure_logging(); replaced on reconfiguration."""


def _formatter(json_output: bool) -> ProcessorFormatter:
    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    return ProcessorFormatter(
        processors=[
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
        foreign_pre_chain=list(_PRE_CHAIN),
    )


def configure_logging(settings: LoggingSettings | None = None, *, stream: TextIO | None = None) -> logging.Handler:
    """Send graphfold's log events to ``stream`` as structured lines.

    Only the ``graphfold`` logger is touched: its level is set from
    ``settings`` and it stops propagating, so events are not duplicated by
    root handlers. Calling again replaces the handler from the previous
    call. Other loggers keep their configuration.

    Args:
        settings: Level and output format (defaults to LoggingSettings())
        stream: Destination, sys.stderr when omitted

    Returns:
        The installed handler.
    """
    settings = settings if settings is not None else LoggingSettings()
    package = logging.getLogger(PACKAGE_LOGGER)
    for previous in [handler for handler in package.handlers if isinstance(handler, _StructuredHandler)]:
        package.removeHandler(previous)
        previous.close()

    handler = _StructuredHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(_formatter(settings.json_output))
    package.addHandler(handler)
    package.setLevel(settings.level)
    package.propagate = False
    return handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound logger writing through the stdlib logger ``name``.

    Level filtering happens before any processor runs, so disabled DEBUG
    events cost one isEnabledFor() check.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return logger
