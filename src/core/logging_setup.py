"""structlog configuration.

Logging is configured by a single `configure_logging` call at startup; the
level comes from `AppSettings` and is never changed afterwards.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

# Filter level above CRITICAL: nothing is emitted.
LOG_DISABLED = logging.CRITICAL + 10


def _drop_event(logger: Any, method_name: str, event_dict: Any) -> Any:
    raise structlog.DropEvent


def configure_logging(level: int = logging.INFO, fmt: str = "json", *, stream: TextIO | None = None) -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if fmt == "console":
        # ConsoleRenderer formats exceptions itself (rich when installed).
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])

    if level > logging.CRITICAL:
        # make_filtering_bound_logger only knows the stdlib levels.
        processors.insert(0, _drop_event)
        level = logging.CRITICAL

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a lazy bound logger, tagged with `logger_name=<name>` when a name is given.

    `logger` is a positional parameter of `structlog.wrap_logger` and cannot
    be used as a context key here.
    """

    if name:
        initial_values.setdefault("logger_name", name)
    return structlog.get_logger(**initial_values)
