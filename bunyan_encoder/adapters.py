"""Per-flavor adapters: native log records in, normalized LogEvents out.

Each adapter pairs a normalize() step with a BunyanEncoder bound to that
flavor's level table and error gate.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from bunyan_encoder.encoder import BunyanEncoder
from bunyan_encoder.levels import JUL, LOG4J, LOG4J2, Flavor, JulLevel, Log4j2Level, Log4jLevel
from bunyan_encoder.models import LogEvent, ThrowableInfo


@dataclass(frozen=True)
class JulRecord:
    level: JulLevel
    logger_name: str | None
    message: str | None
    millis: int
    thread_id: int
    source_class_name: str | None = None
    thrown: BaseException | None = None


@dataclass(frozen=True)
class Log4jEvent:
    level: Log4jLevel
    logger_name: str | None
    message: object
    timestamp: int
    thread_name: str
    thrown: BaseException | None = None


@dataclass(frozen=True)
class Log4j2Event:
    level: Log4j2Level
    logger_name: str | None
    message: str | None
    time_millis: int
    thread_id: int
    source_class_name: str | None = None
    thrown: BaseException | None = None


def _throwable(exc: BaseException | None) -> ThrowableInfo | None:
    if exc is None:
        return None
    return ThrowableInfo.from_exception(exc)


def thread_id_from_name(thread_name: str | None) -> int:
    """Derive a numeric thread identity from a Log4j 1.2 thread name.

    Compatibility shim for the Log4j 1.2 layout only: the live thread's id
    when the event was emitted on the current thread, otherwise the number
    after the last "-" (pool-3-thread-7 -> 7), otherwise 0.
    """
    current = threading.current_thread()
    if thread_name is not None and current.name == thread_name:
        return threading.get_ident()
    if not thread_name:
        return 0
    suffix = thread_name.rsplit("-", 1)[-1]
    if not (suffix.isascii() and suffix.isdigit()):
        return 0
    return int(suffix)


class FlavorAdapter(ABC):
    """Base adapter: subclasses set FLAVOR and implement normalize()."""

    FLAVOR: Flavor

    def __init__(self, encoder: BunyanEncoder | None = None):
        self.encoder = encoder or BunyanEncoder(self.FLAVOR)

    @property
    def content_type(self) -> str:
        return self.encoder.content_type

    @abstractmethod
    def normalize(self, native) -> LogEvent:
        """Convert a native record into a LogEvent."""

    def encode(self, native) -> str:
        return self.encoder.encode(self.normalize(native))

    def encode_bytes(self, native) -> bytes:
        return self.encoder.encode_bytes(self.normalize(native))


class JulAdapter(FlavorAdapter):
    """java.util.logging style records; thread id is captured by the record."""

    FLAVOR = JUL

    def normalize(self, native: JulRecord) -> LogEvent:
        return LogEvent(
            logger_name=native.logger_name,
            level=native.level,
            message=native.message,
            thread_identity=native.thread_id,
            timestamp_millis=native.millis,
            source_class_name=native.source_class_name,
            thrown=_throwable(native.thrown),
        )


class Log4jAdapter(FlavorAdapter):
    """Log4j 1.2 layout events; no source class, thread id derived from its name."""

    FLAVOR = LOG4J

    def normalize(self, native: Log4jEvent) -> LogEvent:
        message = None if native.message is None else str(native.message)
        return LogEvent(
            logger_name=native.logger_name,
            level=native.level,
            message=message,
            thread_identity=thread_id_from_name(native.thread_name),
            timestamp_millis=native.timestamp,
            thrown=_throwable(native.thrown),
        )


class Log4j2Adapter(FlavorAdapter):
    """Log4j 2 plugin layout events; adds levelStr to every line."""

    FLAVOR = LOG4J2

    def normalize(self, native: Log4j2Event) -> LogEvent:
        return LogEvent(
            logger_name=native.logger_name,
            level=native.level,
            message=native.message,
            thread_identity=native.thread_id,
            timestamp_millis=native.time_millis,
            source_class_name=native.source_class_name,
            thrown=_throwable(native.thrown),
        )


ADAPTERS = {
    "jul": JulAdapter,
    "log4j": Log4jAdapter,
    "log4j2": Log4j2Adapter,
}


def get_adapter(flavor: str) -> FlavorAdapter:
    """Return a fresh adapter for the given flavor name."""
    return ADAPTERS[flavor]()
