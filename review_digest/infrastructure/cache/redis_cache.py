"""Redis-backed summary cache.

Entries are stored as JSON strings under "<prefix>:<key>", so summaries
survive restarts and are shared between API workers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.domain.errors import CacheError
from review_digest.domain.models import CacheEntry


@dataclass
class RedisConfig:
    """Configuration for Redis connection."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None
    decode_responses: bool = True


class RedisSummaryCache(SummaryCachePort):
    """SummaryCachePort on top of plain Redis string keys.

    Args:
        cfg: Connection parameters
        key_prefix: Namespace, one per caching discipline
            (e.g. "review-digest:extractive")
        client: Pre-built client (tests pass a fake here)

    Raises:
        CacheError: On any Redis or (de)serialization failure
    """

    def __init__(
        self,
        cfg: RedisConfig | None = None,
        key_prefix: str = "review-digest",
        client: Any | None = None,
    ) -> None:
        self._cfg = cfg or RedisConfig()
        self.key_prefix = key_prefix
        self._client = client if client is not None else self._init_client(self._cfg)

    def _init_client(self, cfg: RedisConfig) -> Any:
        try:
            redis = import_module("redis")
            return redis.Redis(
                host=cfg.host,
                port=cfg.port,
                db=cfg.db,
                password=cfg.password,
                decode_responses=cfg.decode_responses,
            )
        except Exception as ex:
            raise CacheError(f"Redis init failed: {ex}") from ex

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    def get(self, key: str) -> CacheEntry | None:
        try:
            raw = self._client.get(self._key(key))
            if raw is None:
                return None
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            return CacheEntry.from_dict(json.loads(raw))
        except Exception as ex:
            raise CacheError(f"cache get failed for {key!r}: {ex}") from ex

    def set(self, key: str, entry: CacheEntry) -> None:
        try:
            self._client.set(self._key(key), json.dumps(entry.to_dict(), ensure_ascii=False))
        except Exception as ex:
            raise CacheError(f"cache set failed for {key!r}: {ex}") from ex

    def invalidate(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as ex:
            raise CacheError(f"cache invalidate failed for {key!r}: {ex}") from ex
