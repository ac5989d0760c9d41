"""Bunyan line encoder: one normalized LogEvent in, one JSON line out.

Output shape (node-bunyan, schema version 0):
  {"v":0,"level":30,"name":"app","hostname":"h","pid":1,
   "time":"2023-11-14T22:13:20.000Z","msg":"...","src":"...","err":{...}}

Absent values (None) are left out of the object entirely.
"""

from __future__ import annotations

import json
import time
from datetime import date, timedelta

from bunyan_encoder.hostname import get_hostname
from bunyan_encoder.levels import Flavor
from bunyan_encoder.models import LogEvent, ThrowableInfo

SCHEMA_VERSION = 0
MSG_MAX_LENGTH = 20000
CONTENT_TYPE = "application/json"

_EPOCH_DATE = date(1970, 1, 1)
_DAY_MILLIS = 86_400_000
_CYCLE_DAYS = 146_097  # days in 400 Gregorian years


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _format_year(year: int) -> str:
    if year > 9999:
        return f"+{year}"
    if year < 0:
        return f"-{-year:04d}"
    return f"{year:04d}"


def format_timestamp(millis: int) -> str:
    """Render epoch milliseconds as an ISO-8601 UTC instant, e.g. 2023-11-14T22:13:20.000Z.

    Years outside 0000-9999 carry a sign (+10000-01-01T00:00:00.000Z). The
    Gregorian calendar repeats every 400 years, so the day is placed inside
    one cycle after the epoch and the year shifted back by whole cycles.
    """
    days, ms_of_day = divmod(millis, _DAY_MILLIS)
    cycles, days = divmod(days, _CYCLE_DAYS)
    day = _EPOCH_DATE + timedelta(days=days)
    year = day.year + 400 * cycles

    seconds, ms = divmod(ms_of_day, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return (
        f"{_format_year(year)}-{day.month:02d}-{day.day:02d}"
        f"T{hours:02d}:{minutes:02d}:{seconds:02d}.{ms:03d}Z"
    )


def truncate_message(msg: str | None) -> str | None:
    if msg is None or len(msg) <= MSG_MAX_LENGTH:
        return msg
    return msg[:MSG_MAX_LENGTH]


def serialize_error(thrown: ThrowableInfo) -> dict:
    err = {
        "message": thrown.message,
        "name": thrown.type_name,
        "stack": thrown.stack_text,
    }
    return {k: v for k, v in err.items() if v is not None}


class BunyanEncoder:
    """Encodes LogEvents for one flavor.

    Stateless apart from the process-wide hostname cache, so one instance can
    be shared across threads.
    """

    def __init__(self, flavor: Flavor, hostname_func=None, time_func=None,
                 charset: str = "utf-8"):
        self.flavor = flavor
        self.charset = charset
        self._hostname_func = hostname_func or get_hostname
        self._time_func = time_func or _now_millis

    @property
    def content_type(self) -> str:
        # A stream of lines is not itself one JSON document.
        return CONTENT_TYPE

    def build_line(self, event: LogEvent) -> dict:
        """Assemble the bunyan fields for an event, without serializing.

        Raises:
            LevelMappingError: If the event level is not in the flavor table.
        """
        flavor = self.flavor
        line = {
            "v": SCHEMA_VERSION,
            "level": flavor.map_level(event.level),
        }
        if flavor.emit_level_name:
            line["levelStr"] = flavor.level_name(event.level)

        millis = event.timestamp_millis
        if millis is None:
            millis = self._time_func()

        line.update({
            "name": event.logger_name,
            "hostname": self._hostname_func(),
            "pid": event.thread_identity,
            "time": format_timestamp(millis),
            "msg": truncate_message(event.message),
            "src": event.source_class_name,
        })

        if event.thrown is not None and flavor.is_error_tier(event.level):
            line["err"] = serialize_error(event.thrown)

        return {k: v for k, v in line.items() if v is not None}

    def _dumps(self, event: LogEvent, charset: str) -> str:
        # Lone surrogates (surrogateescape input) or characters outside the
        # charset fall back to \u escapes so the line always encodes.
        line = self.build_line(event)
        text = json.dumps(line, ensure_ascii=False, separators=(",", ":"))
        try:
            text.encode(charset)
        except UnicodeEncodeError:
            text = json.dumps(line, ensure_ascii=True, separators=(",", ":"))
        return text + "\n"

    def encode(self, event: LogEvent) -> str:
        """Serialize an event to a single JSON line terminated by a newline.

        The returned text always encodes as UTF-8.
        """
        return self._dumps(event, "utf-8")

    def encode_bytes(self, event: LogEvent) -> bytes:
        return self._dumps(event, self.charset).encode(self.charset)
