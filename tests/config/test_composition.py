"""Tests for the composition root and the DI container.

Model-backed adapters are only constructed here, never loaded: the
embedding, sentiment and LLM adapters import their libraries on first use.
"""

from dataclasses import replace
from datetime import timedelta

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.classifier_port import SentimentPort
from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.application.ports.llm_port import LLMPort
from review_digest.application.use_cases.summarize_chunked import SummarizeChunked
from review_digest.application.use_cases.summarize_extractive import SummarizeExtractive
from review_digest.config import composition
from review_digest.config.compose import Container, build_container
from review_digest.config.settings import AppSettings
from review_digest.infrastructure.cache import redis_cache
from review_digest.infrastructure.cache.memory_cache import InMemorySummaryCache
from review_digest.infrastructure.cache.redis_cache import RedisSummaryCache
from review_digest.infrastructure.sources.json_file_source import JsonFileFeedbackSource
from review_digest.infrastructure.sources.memory_source import InMemoryFeedbackSource


def settings(**overrides) -> AppSettings:
    return replace(AppSettings(), **overrides)


class TestBuilders:
    def test_adapters_satisfy_ports(self) -> None:
        s = settings()
        assert isinstance(composition.build_embedding(s), EmbeddingPort)
        assert isinstance(composition.build_sentiment(s), SentimentPort)
        assert isinstance(composition.build_llm(s), LLMPort)

    def test_llm_empty_base_url_means_default_endpoint(self) -> None:
        llm = composition.build_llm(settings(llm_base_url="", llm_model="m1"))
        assert llm.base_url is None
        assert llm.model == "m1"

    def test_memory_cache_by_default(self) -> None:
        cache = composition.build_cache(settings(cache_backend="memory"), "extractive")
        assert isinstance(cache, InMemorySummaryCache)
        assert isinstance(cache, SummaryCachePort)

    def test_redis_cache_is_namespaced(self, monkeypatch) -> None:
        monkeypatch.setattr(RedisSummaryCache, "_init_client", lambda self, cfg: object())
        s = settings(cache_backend="redis", cache_key_prefix="rd", redis_password="")

        extractive = composition.build_cache(s, "extractive")
        chunked = composition.build_cache(s, "chunked")

        assert isinstance(extractive, RedisSummaryCache)
        assert extractive.key_prefix == "rd:extractive"
        assert chunked.key_prefix == "rd:chunked"

    def test_unbuildable_redis_falls_back_to_memory(self, monkeypatch) -> None:
        def boom(name):
            raise ModuleNotFoundError(name)

        monkeypatch.setattr(redis_cache, "import_module", boom)
        s = settings(cache_backend="redis")

        cache = composition.build_cache(s, "chunked")

        assert isinstance(cache, InMemorySummaryCache)

    def test_container_serves_with_unreachable_redis(self, monkeypatch) -> None:
        def boom(name):
            raise ModuleNotFoundError(name)

        monkeypatch.setattr(redis_cache, "import_module", boom)
        c = Container(settings(cache_backend="redis"))

        assert isinstance(c.get_extractive_cache(), InMemorySummaryCache)
        assert c.get_chunked_use_case().cache is c.get_chunked_cache()

    def test_feedback_source_selection(self) -> None:
        assert isinstance(
            composition.build_feedback_source(settings(feedback_source="memory")),
            InMemoryFeedbackSource,
        )
        json_source = composition.build_feedback_source(
            settings(feedback_source="json", feedback_path="data/corpus.json")
        )
        assert isinstance(json_source, JsonFileFeedbackSource)
        assert str(json_source.path) == "data/corpus.json"

    def test_options_mapping(self) -> None:
        s = settings(summary_k=5, mmr_lambda=0.5, tag_boost=0.2, summary_ttl_s=90,
                     chunk_max_chars=1000)
        ext = composition.extractive_options(s)
        chk = composition.chunked_options(s)
        assert (ext.k, ext.mmr_lambda, ext.tag_boost) == (5, 0.5, 0.2)
        assert chk.ttl == timedelta(seconds=90)
        assert chk.chunk_max_chars == 1000

    def test_use_cases_take_injected_source_and_cache(self) -> None:
        source = InMemoryFeedbackSource()
        cache = InMemorySummaryCache()

        ext = composition.build_extractive_use_case(settings(), source=source, cache=cache)
        chk = composition.build_chunked_use_case(settings(), source=source, cache=cache)

        assert isinstance(ext, SummarizeExtractive)
        assert isinstance(chk, SummarizeChunked)
        # an empty cache is falsy; it must still be the injected one
        assert ext.cache is cache
        assert chk.cache is cache
        assert ext.source is source


class TestContainer:
    def test_adapters_are_lazy_and_shared(self) -> None:
        c = Container(settings())
        assert c._embedding is None
        assert c.get_embedding() is c.get_embedding()
        assert c.get_llm() is c.get_llm()

    def test_caches_are_per_discipline(self) -> None:
        c = build_container(settings())
        assert c.get_extractive_cache() is not c.get_chunked_cache()

    def test_use_cases_share_process_caches(self) -> None:
        c = Container(settings())
        first = c.get_extractive_use_case()
        second = c.get_extractive_use_case(source=InMemoryFeedbackSource())
        assert first.cache is second.cache
        assert c.get_chunked_use_case().cache is c.get_chunked_cache()

    def test_inline_source_overrides_configured_one(self) -> None:
        c = Container(settings())
        inline = InMemoryFeedbackSource()
        assert c.get_extractive_use_case(source=inline).source is inline
        assert c.get_chunked_use_case().source is c.get_feedback_source()
