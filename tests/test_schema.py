"""Tests for bunyan_encoder.schema."""

import json

import pytest

from bunyan_encoder.adapters import (
    JulAdapter,
    JulRecord,
    Log4j2Adapter,
    Log4j2Event,
    Log4jAdapter,
    Log4jEvent,
)
from bunyan_encoder.levels import JulLevel, Log4j2Level, Log4jLevel
from bunyan_encoder.schema import LineValidator

MILLIS = 1700000000000


@pytest.fixture
def validator():
    return LineValidator()


def _valid_doc():
    return {
        "v": 0,
        "level": 30,
        "name": "app",
        "hostname": "testhost",
        "pid": 1,
        "time": "2023-11-14T22:13:20.000Z",
        "msg": "hello",
    }


class TestEncodedLinesValid:
    def test_jul(self, validator, jul_encoder, boom):
        line = JulAdapter(jul_encoder).encode(
            JulRecord(JulLevel.SEVERE, "app", "failed", MILLIS, 3, "app.Main", boom)
        )
        assert validator.validate(line) == (True, [])

    def test_log4j(self, validator, log4j_encoder):
        line = Log4jAdapter(log4j_encoder).encode(
            Log4jEvent(Log4jLevel.INFO, "app", None, MILLIS, "pool-1-thread-2")
        )
        assert validator.validate(line) == (True, [])

    def test_log4j2(self, validator, log4j2_encoder):
        line = Log4j2Adapter(log4j2_encoder).encode(
            Log4j2Event(Log4j2Level.TRACE, "app", "t", MILLIS, 3, "app.Main")
        )
        assert validator.validate(line) == (True, [])

    def test_exception_without_message(self, validator, jul_encoder):
        try:
            raise ValueError()
        except ValueError as exc:
            line = JulAdapter(jul_encoder).encode(
                JulRecord(JulLevel.SEVERE, "app", "m", MILLIS, 3, None, exc)
            )
        assert "message" not in json.loads(line)["err"]
        assert validator.validate(line) == (True, [])


    def test_signed_year(self, validator, jul_encoder):
        line = JulAdapter(jul_encoder).encode(
            JulRecord(JulLevel.INFO, "app", "far future", 253402300800000, 3)
        )
        assert json.loads(line)["time"] == "+10000-01-01T00:00:00.000Z"
        assert validator.validate(line) == (True, [])


class TestInvalidLines:
    def test_missing_hostname(self, validator):
        doc = _valid_doc()
        del doc["hostname"]
        is_valid, errors = validator.validate(json.dumps(doc) + "\n")
        assert is_valid is False
        assert "hostname" in " ".join(errors)

    def test_renamed_key(self, validator):
        doc = _valid_doc()
        doc["message"] = doc.pop("msg")
        is_valid, _ = validator.validate(json.dumps(doc) + "\n")
        assert is_valid is False

    def test_bad_level(self, validator):
        doc = _valid_doc()
        doc["level"] = 35
        assert validator.validate(json.dumps(doc) + "\n")[0] is False

    def test_missing_newline(self, validator):
        assert validator.validate(json.dumps(_valid_doc()))[0] is False

    def test_not_json(self, validator):
        is_valid, errors = validator.validate("not json\n")
        assert is_valid is False
        assert errors


class TestStats:
    def test_counts(self, validator):
        good = json.dumps(_valid_doc()) + "\n"
        validator.validate(good)
        validator.validate(good)
        validator.validate("{}\n")
        stats = validator.get_stats()
        assert stats["total"] == 3
        assert stats["valid"] == 2
        assert stats["invalid"] == 1
        assert stats["error_types"]["required"] >= 1

    def test_reset(self, validator):
        validator.validate("nope")
        validator.reset_stats()
        assert validator.get_stats() == {
            "total": 0, "valid": 0, "invalid": 0, "error_types": {},
        }
