"""Time-based cache injected into catalog ingestion."""

import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Catalog feeds are refreshed at most every six hours
DEFAULT_TTL_SECONDS = 6 * 60 * 60


class TTLCache:
    """Key/value cache whose entries expire after a fixed time-to-live.

    Attributes:
        ttl_seconds: Lifetime of each entry
        clock: Callable returning the current time in seconds
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self.clock() - stored_at >= self.ttl_seconds:
            logger.debug(f"Cache entry expired: {key}")
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value, resetting its expiry."""
        self._entries[key] = (self.clock(), value)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when key is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
