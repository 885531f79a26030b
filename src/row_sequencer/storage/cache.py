import threading
import time
from typing import Callable


class MemoryCache:
    """
    Process-local FastCache. Entries expire ``ttl`` seconds after they are
    written; expired entries read as absent and are dropped lazily.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._guard = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: float) -> None:
        with self._guard:
            self._entries[key] = (str(value), self._clock() + ttl)

    def remove(self, key: str) -> None:
        with self._guard:
            self._entries.pop(key, None)
