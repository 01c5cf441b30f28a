"""
Structured Logging

Configures structlog for the inspector. Two output formats:

- ``text``: colored, human-readable console output (local development)
- ``json``: JSON lines for log aggregation (hosted deployments)

Existing ``logging.getLogger`` call sites (uvicorn, httpx) are routed through
the same processor chain so every line carries the request context bound by
the logging middleware.
"""

from __future__ import annotations

import logging
import sys

import structlog

_NOISE_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """
    Configure structured logging for the process.

    Args:
        level: Root log level (e.g. "DEBUG", "INFO", "WARNING")
        fmt: Output format, "text" or "json"
    """
    shared = _shared_processors()

    final: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if fmt == "json":
        final += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=final,
        foreign_pre_chain=shared,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _NOISE_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
