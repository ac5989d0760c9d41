"""Normalized log event model shared by every flavor adapter."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ThrowableInfo:
    message: str | None    # absent when the exception carries no args
    type_name: str         # unqualified class name, e.g. "RuntimeError"
    stack_text: str        # full traceback as the interpreter prints it

    @classmethod
    def from_exception(cls, exc: BaseException) -> ThrowableInfo:
        """Capture an exception the way the default trace printer renders it.

        Chained causes (``raise ... from ...``) and implicit context are part
        of the stack text because ``traceback.format_exception`` includes them.
        """
        stack = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        return cls(
            message=str(exc) if exc.args else None,
            type_name=type(exc).__name__,
            stack_text=stack,
        )


@dataclass(frozen=True)
class LogEvent:
    logger_name: str | None
    level: Any                        # flavor-native level, mapped by the encoder
    message: str | None
    thread_identity: int | str
    timestamp_millis: int | None = None
    source_class_name: str | None = None
    thrown: ThrowableInfo | None = None
