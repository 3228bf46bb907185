"""Structured logging configuration.

structlog is configured once at process start and renders through the
standard library ``logging`` module, so uvicorn and SQLAlchemy records share
the same handler and format.

Output:
    - JSON lines (production log aggregation) when ``logging.json`` is true
    - Human-readable console output otherwise (local development)

Usage:
    from content_api.utils.logging import configure_logging, flush_logging

    configure_logging(level="INFO", json_output=True)
    try:
        ...
    finally:
        flush_logging()
"""

import logging
import sys

import structlog

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
]


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog and the root stdlib logger.

    Safe to call more than once; the root handler is replaced each time.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Render JSON lines instead of console output.
    """
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn installs its own handlers; route them through ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def flush_logging() -> None:
    """Flush and close all logging handlers.

    Called from the host's ``finally`` block so buffered records are written
    whether startup succeeded or failed.
    """
    logging.shutdown()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module name."""
    return structlog.get_logger(name)
