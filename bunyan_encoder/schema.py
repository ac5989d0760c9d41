import json
from collections import defaultdict

import jsonschema

from bunyan_encoder.levels import BUNYAN_LEVELS

BUNYAN_LINE_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bunyan log line",
    "type": "object",
    "required": ["v", "level", "hostname", "pid", "time"],
    "properties": {
        "v": {"const": 0},
        "level": {"enum": list(BUNYAN_LEVELS)},
        "levelStr": {"type": "string"},
        "name": {"type": "string"},
        "hostname": {"type": "string", "minLength": 1},
        "pid": {"type": ["integer", "string"]},
        "time": {
            "type": "string",
            "pattern": r"^[+-]?\d{4,}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$",
        },
        "msg": {"type": "string"},
        "src": {"type": "string"},
        "err": {
            "type": "object",
            "required": ["name", "stack"],
            "properties": {
                "message": {"type": "string"},
                "name": {"type": "string"},
                "stack": {"type": "string"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


class LineValidator:
    """Validates encoded bunyan lines against BUNYAN_LINE_SCHEMA."""

    def __init__(self, schema=None):
        self._validator = jsonschema.Draft202012Validator(schema or BUNYAN_LINE_SCHEMA)
        self.reset_stats()

    def validate(self, line):
        """Validate one encoded line (trailing newline allowed).

        Returns:
            tuple: (is_valid: bool, errors: list[str])
        """
        self._stats["total"] += 1
        try:
            document = json.loads(line)
        except json.JSONDecodeError as exc:
            return self._invalid([("json", f"Not valid JSON: {exc.msg}")])

        if line.count("\n") != 1 or not line.endswith("\n"):
            return self._invalid([("newline", "Line must end with exactly one newline")])

        errors = [(e.validator, e.message) for e in self._validator.iter_errors(document)]
        if errors:
            return self._invalid(errors)

        self._stats["valid"] += 1
        return True, []

    def _invalid(self, errors):
        self._stats["invalid"] += 1
        for kind, _ in errors:
            self._stats["error_types"][kind] += 1
        return False, [message for _, message in errors]

    def get_stats(self):
        """Return a copy of the stats dict."""
        stats = dict(self._stats)
        stats["error_types"] = dict(stats["error_types"])
        return stats

    def reset_stats(self):
        self._stats = {
            "total": 0,
            "valid": 0,
            "invalid": 0,
            "error_types": defaultdict(int),
        }
