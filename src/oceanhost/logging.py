import logging
import sys
from typing import Any

import structlog

LOG_FORMATS = ("console", "json")


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    raise ValueError(f"Unknown log format: {log_format!r} (expected one of {LOG_FORMATS})")


def configure_logging(level: int | str = logging.INFO, log_format: str = "console") -> None:
    """Route structlog through stdlib logging on stderr.

    stdout carries the CLI summary. ``log_format`` is ``console`` or ``json``.
    """
    renderer = _renderer(log_format)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Logger carrying publish fields (app, region) on every event."""
    return structlog.get_logger().bind(**kwargs)
