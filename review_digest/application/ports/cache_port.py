from typing import Protocol, runtime_checkable

from review_digest.domain.models import CacheEntry


@runtime_checkable
class SummaryCachePort(Protocol):
    """Keyed summary store; one instance per caching discipline."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, entry: CacheEntry) -> None: ...

    def invalidate(self, key: str) -> None: ...
