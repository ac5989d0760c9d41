"""Tests for bunyan_encoder.hostname."""

import logging
import threading
import time

import pytest

from bunyan_encoder import hostname
from bunyan_encoder.hostname import (
    UNKNOWN_HOST,
    HostnameCache,
    HostResolutionError,
    get_hostname,
    resolve_hostname,
)


class _CountingResolver:
    def __init__(self, result="host-a", delay=0.0):
        self.calls = 0
        self.result = result
        self.delay = delay

    def __call__(self):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class TestResolveHostname:
    def test_returns_socket_hostname(self, monkeypatch):
        monkeypatch.setattr(hostname.socket, "gethostname", lambda: "box-1")
        assert resolve_hostname() == "box-1"

    def test_os_error_wrapped(self, monkeypatch):
        def fail():
            raise OSError("no network")
        monkeypatch.setattr(hostname.socket, "gethostname", fail)
        with pytest.raises(HostResolutionError):
            resolve_hostname()

    def test_empty_name_is_failure(self, monkeypatch):
        monkeypatch.setattr(hostname.socket, "gethostname", lambda: "")
        with pytest.raises(HostResolutionError):
            resolve_hostname()


class TestHostnameCache:
    def test_resolves_once(self):
        resolver = _CountingResolver()
        cache = HostnameCache(resolver)
        assert cache.get() == "host-a"
        assert cache.get() == "host-a"
        assert resolver.calls == 1

    def test_failure_falls_back_to_unknown(self, caplog):
        resolver = _CountingResolver(HostResolutionError("lookup failed"))
        cache = HostnameCache(resolver)
        with caplog.at_level(logging.WARNING, logger="bunyan_encoder.hostname"):
            assert cache.get() == UNKNOWN_HOST
        assert cache.get() == "unknown"
        assert resolver.calls == 1
        assert "lookup failed" in caplog.text

    def test_other_errors_propagate(self):
        cache = HostnameCache(_CountingResolver(RuntimeError("bug")))
        with pytest.raises(RuntimeError):
            cache.get()

    def test_reset(self):
        resolver = _CountingResolver()
        cache = HostnameCache(resolver)
        cache.get()
        cache.reset()
        cache.get()
        assert resolver.calls == 2

    def test_concurrent_first_use(self):
        resolver = _CountingResolver(delay=0.05)
        cache = HostnameCache(resolver)
        barrier = threading.Barrier(20)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            value = cache.get()
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert resolver.calls == 1
        assert results == ["host-a"] * 20


class TestProcessCache:
    def test_get_hostname_non_empty(self):
        name = get_hostname()
        assert isinstance(name, str)
        assert name
