"""
Structured logging configuration using structlog.

Diagnostics go to stderr (and optionally a file); standard output is reserved
for the standup report so it stays copy-paste clean.

Renderers:
  - stderr: key=value console lines when attached to a terminal, JSON lines
    otherwise ("auto"); LOG_FORMAT=json or console forces one
  - log file: always JSON lines
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog


def _formatter(
    shared_processors: list[structlog.types.Processor],
    log_format: str,
    stream: TextIO | None = None,
) -> logging.Formatter:
    """ProcessorFormatter ending in a console or JSON renderer."""
    if log_format == "auto":
        log_format = "console" if stream is not None and stream.isatty() else "json"

    if log_format == "console":
        # ConsoleRenderer formats exc_info itself.
        tail: list[structlog.types.Processor] = [
            structlog.dev.ConsoleRenderer(colors=stream is not None and stream.isatty()),
        ]
    else:
        tail = [
            structlog.processors.ExceptionRenderer(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
    )


def configure_logging(
    log_level: str = "WARNING",
    log_file: str | None = None,
    log_format: str = "auto",
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog over stdlib logging.

    Call once at startup before any log calls are made.

    Args:
        log_level:  One of DEBUG / INFO / WARNING / ERROR / CRITICAL.
        log_file:   Optional file path. Parent directories are created if needed.
                    File output is additive to the stream and always JSON.
        log_format: "auto", "json" or "console" for the stream handler.
        stream:     Diagnostic stream; defaults to the current sys.stderr.
    """
    stream = stream if stream is not None else sys.stderr

    if log_file:
        try:
            Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            log_file = None  # Fall back to stream-only if directory can't be created

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stream_handler = logging.StreamHandler(stream)
    stream_handler.setFormatter(_formatter(shared_processors, log_format, stream))
    handlers: list[logging.Handler] = [stream_handler]

    if log_file:
        file_handler = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
        file_handler.setFormatter(_formatter(shared_processors, "json"))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(getattr(logging, log_level, logging.WARNING))
