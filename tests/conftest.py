"""Shared pytest fixtures for the bunyan encoder test suite."""

import pytest

from bunyan_encoder.config import ENV_VARS
from bunyan_encoder.encoder import BunyanEncoder
from bunyan_encoder.levels import JUL, LOG4J, LOG4J2, STDLIB


def _raise_boom():
    raise RuntimeError("boom")


@pytest.fixture
def boom():
    """A RuntimeError('boom') with a real traceback attached."""
    try:
        _raise_boom()
    except RuntimeError as exc:
        return exc


@pytest.fixture
def make_encoder():
    """Factory for encoders with a fixed hostname."""
    def _make(flavor, **kwargs):
        kwargs.setdefault("hostname_func", lambda: "testhost")
        return BunyanEncoder(flavor, **kwargs)
    return _make


@pytest.fixture
def jul_encoder(make_encoder):
    return make_encoder(JUL)


@pytest.fixture
def log4j_encoder(make_encoder):
    return make_encoder(LOG4J)


@pytest.fixture
def log4j2_encoder(make_encoder):
    return make_encoder(LOG4J2)


@pytest.fixture
def stdlib_encoder(make_encoder):
    return make_encoder(STDLIB)


@pytest.fixture
def clean_env(monkeypatch):
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
