"""Native severity levels per logging flavor and their bunyan mappings.

Bunyan levels:
  10 trace, 20 debug, 30 info, 40 warn, 50 error, 60 fatal

Every flavor owns its own table. Tables are read-only mappings; a level
missing from a table raises LevelMappingError instead of guessing a severity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Callable, Mapping

TRACE = 10
DEBUG = 20
INFO = 30
WARN = 40
ERROR = 50
FATAL = 60

BUNYAN_LEVELS = (TRACE, DEBUG, INFO, WARN, ERROR, FATAL)


class LevelMappingError(LookupError):
    """Raised when a native level has no entry in its flavor's table."""

    def __init__(self, flavor: str, level: Any):
        self.flavor = flavor
        self.level = level
        super().__init__(f"No bunyan level mapped for {flavor} level {level!r}")


class JulLevel(IntEnum):
    OFF = 2**31 - 1
    SEVERE = 1000
    WARNING = 900
    INFO = 800
    CONFIG = 700
    FINE = 500
    FINER = 400
    FINEST = 300
    ALL = -(2**31)


class Log4jLevel(IntEnum):
    OFF = 2**31 - 1
    FATAL = 50000
    ERROR = 40000
    WARN = 30000
    INFO = 20000
    DEBUG = 10000
    TRACE = 5000
    ALL = -(2**31)


class Log4j2Level(IntEnum):
    # intLevel: lower is more severe
    OFF = 0
    FATAL = 100
    ERROR = 200
    WARN = 300
    INFO = 400
    DEBUG = 500
    TRACE = 600
    ALL = 2**31 - 1


JUL_LEVELS: Mapping[JulLevel, int] = MappingProxyType({
    JulLevel.SEVERE: ERROR,
    JulLevel.WARNING: WARN,
    JulLevel.CONFIG: INFO,
    JulLevel.INFO: INFO,
    JulLevel.FINE: DEBUG,
    JulLevel.FINER: TRACE,
    JulLevel.FINEST: TRACE,
})

LOG4J_LEVELS: Mapping[Log4jLevel, int] = MappingProxyType({
    Log4jLevel.FATAL: FATAL,
    Log4jLevel.ERROR: ERROR,
    Log4jLevel.WARN: WARN,
    Log4jLevel.INFO: INFO,
    Log4jLevel.DEBUG: DEBUG,
    Log4jLevel.TRACE: TRACE,
})

LOG4J2_LEVELS: Mapping[Log4j2Level, int] = MappingProxyType({
    Log4j2Level.FATAL: FATAL,
    Log4j2Level.ERROR: ERROR,
    Log4j2Level.WARN: WARN,
    Log4j2Level.INFO: INFO,
    Log4j2Level.DEBUG: DEBUG,
    Log4j2Level.TRACE: TRACE,
})

STDLIB_LEVELS: Mapping[int, int] = MappingProxyType({
    logging.CRITICAL: FATAL,
    logging.ERROR: ERROR,
    logging.WARNING: WARN,
    logging.INFO: INFO,
    logging.DEBUG: DEBUG,
})


@dataclass(frozen=True)
class Flavor:
    """Level table, error gate and extra fields for one logging framework."""

    name: str
    table: Mapping[Any, int]
    is_error_tier: Callable[[Any], bool]
    emit_level_name: bool = False

    def map_level(self, level: Any) -> int:
        try:
            return self.table[level]
        except KeyError:
            raise LevelMappingError(self.name, level) from None

    def level_name(self, level: Any) -> str:
        if isinstance(level, IntEnum):
            return level.name
        return logging.getLevelName(level)


JUL = Flavor(
    name="jul",
    table=JUL_LEVELS,
    is_error_tier=lambda level: level >= JulLevel.WARNING,
)

# Log4j 1.2 only attaches errors from ERROR upwards.
LOG4J = Flavor(
    name="log4j",
    table=LOG4J_LEVELS,
    is_error_tier=lambda level: level >= Log4jLevel.ERROR,
)

LOG4J2 = Flavor(
    name="log4j2",
    table=LOG4J2_LEVELS,
    is_error_tier=lambda level: level <= Log4j2Level.WARN,
    emit_level_name=True,
)

STDLIB = Flavor(
    name="stdlib",
    table=STDLIB_LEVELS,
    is_error_tier=lambda level: level >= logging.WARNING,
)

FLAVORS: Mapping[str, Flavor] = MappingProxyType(
    {f.name: f for f in (JUL, LOG4J, LOG4J2, STDLIB)}
)


def map_level(flavor: Flavor | str, level: Any) -> int:
    """Translate a native level to its bunyan integer for the given flavor."""
    if isinstance(flavor, str):
        flavor = FLAVORS[flavor]
    return flavor.map_level(level)
