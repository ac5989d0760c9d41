"""Bunyan formatter for Python's standard logging module."""

from __future__ import annotations

import logging
import sys

from bunyan_encoder.config import Config
from bunyan_encoder.encoder import BunyanEncoder
from bunyan_encoder.levels import STDLIB
from bunyan_encoder.models import LogEvent, ThrowableInfo


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Normalize a stdlib LogRecord into a LogEvent."""
    thrown = None
    if record.exc_info and record.exc_info[1] is not None:
        thrown = ThrowableInfo.from_exception(record.exc_info[1])

    return LogEvent(
        logger_name=record.name,
        level=record.levelno,
        message=record.getMessage(),
        thread_identity=record.thread or 0,
        timestamp_millis=int(record.created) * 1000 + int(record.msecs),
        source_class_name=record.module,
        thrown=thrown,
    )


class BunyanFormatter(logging.Formatter):
    """Format log records as node-bunyan JSON lines.

    The handler's terminator supplies the trailing newline, so format()
    returns the line without it.

    Usage:
        handler = logging.StreamHandler()
        handler.setFormatter(BunyanFormatter())
    """

    def __init__(self, encoder: BunyanEncoder | None = None):
        super().__init__()
        self.encoder = encoder or BunyanEncoder(STDLIB)

    def format(self, record: logging.LogRecord) -> str:
        return self.encoder.encode(record_to_event(record))[:-1]


def _build_handler(config: Config) -> logging.Handler:
    if config.output == "stderr":
        return logging.StreamHandler(sys.stderr)
    if config.output == "stdout":
        return logging.StreamHandler(sys.stdout)
    return logging.FileHandler(config.output, encoding=config.charset)


def configure_logging(config: Config | None = None) -> logging.Handler:
    """Attach a bunyan handler to the configured logger and return it.

    A bunyan handler installed by an earlier call on the same logger is
    removed and closed first.
    """
    config = config or Config()
    target = logging.getLogger(config.logger_name or None)

    for existing in list(target.handlers):
        if isinstance(existing.formatter, BunyanFormatter):
            target.removeHandler(existing)
            existing.close()

    handler = _build_handler(config)
    handler.setFormatter(BunyanFormatter(BunyanEncoder(STDLIB, charset=config.charset)))
    target.addHandler(handler)
    target.setLevel(config.level)
    return handler


def apply_bunyan_logging() -> None:
    """Switch every handler on the root logger to BunyanFormatter."""
    formatter = BunyanFormatter()
    root = logging.getLogger()
    for handler in root.handlers:
        handler.setFormatter(formatter)
