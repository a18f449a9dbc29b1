"""In-memory page cache with LRU eviction and a fixed time-to-live."""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Generic, Optional, TypeVar

V = TypeVar("V")


class PageCache(Generic[V]):
    """Bounded mapping whose entries expire ``ttl`` seconds after insertion.

    Reads refresh an entry's recency but not its expiry.  When full, the
    least-recently-used entry is evicted.  Not thread-safe; it is meant to be
    used from a single event loop.
    """

    def __init__(
        self,
        max_entries: int = 2000,
        ttl: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._data: OrderedDict[str, tuple[V, float]] = OrderedDict()

    def get(self, key: str) -> Optional[V]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires = entry
        if self._clock() >= expires:
            del self._data[key]
            return None
        self._data.move_to_end(key)
        return value

    def set(self, key: str, value: V) -> None:
        if key in self._data:
            del self._data[key]
        self._data[key] = (value, self._clock() + self.ttl)
        self._purge_expired()
        while len(self._data) > self.max_entries:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, (_, exp) in self._data.items() if now >= exp]:
            del self._data[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._data)
