"""Contract tests for the summary cache backends (in-memory and fake Redis)."""

import json
from datetime import UTC, datetime

import pytest

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.domain.errors import CacheError
from review_digest.domain.models import CacheEntry, SentimentStats, Summary
from review_digest.infrastructure.cache import redis_cache as rc_mod
from review_digest.infrastructure.cache.memory_cache import InMemorySummaryCache
from review_digest.infrastructure.cache.redis_cache import RedisConfig, RedisSummaryCache


class FakeRedis:
    """Dict-backed stand-in for redis.Redis string commands."""

    def __init__(self, fail: bool = False) -> None:
        self.store: dict[str, str] = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        return self.store.get(key)

    def set(self, key, value):
        if self.fail:
            raise ConnectionError("redis down")
        self.store[key] = value

    def delete(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        self.store.pop(key, None)


ENTRY = CacheEntry(
    summary=Summary(
        overall="Loved by most.",
        pros=["Great cast"],
        cons=["Too long"],
        stats=SentimentStats.from_counts(3, 1, 1, 5),
        quotes=["Great cast"],
    ),
    expires_at=datetime(2024, 6, 1, 13, 0, tzinfo=UTC),
)


@pytest.fixture(params=["memory", "redis"])
def cache(request) -> SummaryCachePort:
    if request.param == "memory":
        return InMemorySummaryCache()
    return RedisSummaryCache(key_prefix="test", client=FakeRedis())


def test_get_missing_returns_none(cache):
    assert cache.get("nope") is None


def test_set_then_get(cache):
    cache.set("m1", ENTRY)
    assert cache.get("m1") == ENTRY


def test_overwrite(cache):
    cache.set("m1", ENTRY)
    newer = CacheEntry(summary=Summary(overall="changed"), hash="h2")
    cache.set("m1", newer)
    assert cache.get("m1") == newer


def test_invalidate(cache):
    cache.set("m1", ENTRY)
    cache.invalidate("m1")
    cache.invalidate("never-set")
    assert cache.get("m1") is None


def test_backends_satisfy_port(cache):
    assert isinstance(cache, SummaryCachePort)


class TestRedisBackend:
    def test_keys_are_prefixed_json(self) -> None:
        client = FakeRedis()
        RedisSummaryCache(key_prefix="rd:extractive", client=client).set("m1", ENTRY)

        raw = client.store["rd:extractive:m1"]
        data = json.loads(raw)
        assert data["summary"]["stats"]["positivePercent"] == 60
        assert data["expires_at"].startswith("2024-06-01T13:00:00")

    def test_bytes_payload_is_decoded(self) -> None:
        client = FakeRedis()
        client.store["p:m1"] = json.dumps(ENTRY.to_dict()).encode("utf-8")
        assert RedisSummaryCache(key_prefix="p", client=client).get("m1") == ENTRY

    @pytest.mark.parametrize("op", ["get", "set", "invalidate"])
    def test_backend_failures_raise_cache_error(self, op) -> None:
        cache = RedisSummaryCache(client=FakeRedis(fail=True))
        with pytest.raises(CacheError):
            if op == "set":
                cache.set("m1", ENTRY)
            else:
                getattr(cache, op)("m1")

    def test_corrupt_payload_raises_cache_error(self) -> None:
        client = FakeRedis()
        client.store["review-digest:m1"] = "{not json"
        with pytest.raises(CacheError):
            RedisSummaryCache(client=client).get("m1")

    def test_client_built_from_config(self, monkeypatch) -> None:
        created: list[dict] = []

        class FakeRedisModule:
            @staticmethod
            def Redis(**kwargs):  # noqa: N802
                created.append(kwargs)
                return FakeRedis()

        monkeypatch.setattr(rc_mod, "import_module", lambda name: FakeRedisModule)
        RedisSummaryCache(RedisConfig(host="cache", port=6380, db=2, password="pw"))
        assert created == [
            {"host": "cache", "port": 6380, "db": 2, "password": "pw", "decode_responses": True}
        ]

    def test_init_failure_raises_cache_error(self, monkeypatch) -> None:
        def boom(name):
            raise ModuleNotFoundError(name)

        monkeypatch.setattr(rc_mod, "import_module", boom)
        with pytest.raises(CacheError, match="Redis init failed"):
            RedisSummaryCache()
