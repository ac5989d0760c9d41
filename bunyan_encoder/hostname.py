"""Process-wide cached hostname, resolved once on first use."""

import logging
import socket
import threading

logger = logging.getLogger(__name__)

UNKNOWN_HOST = "unknown"


class HostResolutionError(OSError):
    """Raised when the local hostname cannot be determined."""


def resolve_hostname() -> str:
    try:
        name = socket.gethostname()
    except OSError as exc:
        raise HostResolutionError(f"Local hostname lookup failed: {exc}") from exc
    if not name:
        raise HostResolutionError("Local hostname lookup returned an empty name")
    return name


class HostnameCache:
    """Thread-safe lazy holder for the local hostname.

    The first caller resolves the name under a lock and publishes it; every
    later caller reads the published value without locking. A failed lookup
    publishes "unknown" for the rest of the process.
    """

    def __init__(self, resolver=resolve_hostname):
        self._resolver = resolver
        self._lock = threading.Lock()
        self._value: str | None = None

    def get(self) -> str:
        value = self._value
        if value is not None:
            return value

        failure = None
        with self._lock:
            if self._value is None:
                try:
                    self._value = self._resolver()
                except HostResolutionError as exc:
                    self._value = UNKNOWN_HOST
                    failure = exc
            value = self._value

        # Logged outside the lock: a bunyan handler may re-enter get().
        if failure is not None:
            logger.warning("Using hostname %r: %s", UNKNOWN_HOST, failure)
        return value

    def reset(self) -> None:
        """Forget the cached value so the next get() resolves again."""
        with self._lock:
            self._value = None


_cache = HostnameCache()


def get_hostname() -> str:
    return _cache.get()


def reset_hostname_cache() -> None:
    _cache.reset()
