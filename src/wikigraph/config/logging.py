"""Log routing for wikigraph.

Two kinds of records reach the same stderr handler:

- structured service events (``structlog.get_logger``), e.g. ``index.rebuilt``
- plain ``logging.getLogger(__name__)`` records from the infrastructure
  modules (skipped documents, unreadable directories)

Both run through one structlog processor chain, so ``--log-json`` turns
every line into a JSON object. The handler is installed on the root logger
under a fixed name and replaced, never stacked, when logging is configured
again in the same process.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import TextIO

import structlog

HANDLER_NAME = "wikigraph"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# Loggers given an explicit level by the previous call; reset on reconfigure.
_overridden: set[str] = set()


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
    levels: Mapping[str, str | int] | None = None,
) -> None:
    """Route structlog and stdlib records to *stream* (default: stderr).

    Args:
        verbose: ``wikigraph.*`` loggers at DEBUG instead of WARNING.
        log_json: One JSON object per line instead of console output.
        stream: Destination for log lines.
        levels: Per-logger overrides applied after *verbose*, e.g.
            ``{"wikigraph.infrastructure.filesystem": "DEBUG"}``.
    """
    out = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _install_handler(out, log_json=log_json)
    _apply_levels(verbose=verbose, levels=levels or {})


def _install_handler(out: TextIO, *, log_json: bool) -> None:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    handler = logging.StreamHandler(out)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)


def _apply_levels(*, verbose: bool, levels: Mapping[str, str | int]) -> None:
    for name in _overridden:
        logging.getLogger(name).setLevel(logging.NOTSET)
    _overridden.clear()

    logging.getLogger("wikigraph").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level.upper() if isinstance(level, str) else level)
        _overridden.add(name)
