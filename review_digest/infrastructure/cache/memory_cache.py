from __future__ import annotations

import threading

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.domain.models import CacheEntry


class InMemorySummaryCache(SummaryCachePort):
    """Process-local summary store (one per caching discipline).

    Safe to share between request threads; entries live until overwritten,
    invalidated or the process exits.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
