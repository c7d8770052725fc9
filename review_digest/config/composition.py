from datetime import timedelta

import structlog

from review_digest.application.dto.summary_dto import ChunkedOptions, ExtractiveOptions
from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.classifier_port import SentimentPort
from review_digest.application.ports.clock_port import ClockPort
from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.application.ports.llm_port import LLMPort
from review_digest.application.use_cases.summarize_chunked import SummarizeChunked
from review_digest.application.use_cases.summarize_extractive import SummarizeExtractive
from review_digest.config.settings import AppSettings
from review_digest.domain.errors import CacheError
from review_digest.infrastructure.cache.memory_cache import InMemorySummaryCache
from review_digest.infrastructure.cache.redis_cache import RedisConfig, RedisSummaryCache
from review_digest.infrastructure.embeddings.sentence_transformers_adapter import (
    SentenceTransformersEmbeddingAdapter,
)
from review_digest.infrastructure.llm.openai_adapter import OpenAIChatAdapter
from review_digest.infrastructure.sentiment.transformers_sentiment_adapter import (
    TransformersSentimentAdapter,
)
from review_digest.infrastructure.sources.json_file_source import JsonFileFeedbackSource
from review_digest.infrastructure.sources.memory_source import InMemoryFeedbackSource
from review_digest.infrastructure.time.system_clock import SystemClock

logger = structlog.get_logger(__name__)


def build_embedding(settings: AppSettings) -> EmbeddingPort:
    return SentenceTransformersEmbeddingAdapter(
        model_name=settings.embedding_model,
        device=settings.embedding_device,
        batch_size=settings.embedding_batch_size,
    )


def build_sentiment(settings: AppSettings) -> SentimentPort:
    return TransformersSentimentAdapter(
        model_name=settings.sentiment_model,
        device=settings.sentiment_device,
        batch_size=settings.sentiment_batch_size,
        neutral_threshold=settings.sentiment_neutral_threshold,
    )


def build_llm(settings: AppSettings) -> LLMPort:
    return OpenAIChatAdapter(
        base_url=settings.llm_base_url or None,
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
    )


def build_clock() -> ClockPort:
    """Build clock adapter for time operations.

    Note:
        Tests should inject a fixed clock instead.
    """
    return SystemClock()


def build_cache(settings: AppSettings, namespace: str) -> SummaryCachePort:
    """Build one summary cache; `namespace` separates the two caching disciplines.

    Supports: memory | redis. Unknown backends, and a Redis client that cannot
    be built, fall back to memory.
    """
    if settings.cache_backend == "redis":
        cfg = RedisConfig(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password or None,
        )
        try:
            return RedisSummaryCache(cfg, key_prefix=f"{settings.cache_key_prefix}:{namespace}")
        except CacheError as ex:
            logger.warning(
                "cache_backend_unavailable", backend="redis", namespace=namespace, error=str(ex)
            )
    return InMemorySummaryCache()


def build_feedback_source(settings: AppSettings) -> FeedbackSourcePort:
    """Supports: json | memory (memory starts empty)."""
    if settings.feedback_source == "json":
        return JsonFileFeedbackSource(settings.feedback_path)
    return InMemoryFeedbackSource()


def extractive_options(settings: AppSettings) -> ExtractiveOptions:
    return ExtractiveOptions(
        k=settings.summary_k,
        mmr_lambda=settings.mmr_lambda,
        pros_max=settings.pros_max,
        cons_max=settings.cons_max,
        tag_boost=settings.tag_boost,
        sample_cap=settings.sentiment_sample_cap,
        embed_batch_size=settings.embedding_batch_size,
        sentiment_batch_size=settings.sentiment_batch_size,
    )


def chunked_options(settings: AppSettings) -> ChunkedOptions:
    return ChunkedOptions(
        chunk_max_chars=settings.chunk_max_chars,
        ttl=timedelta(seconds=settings.summary_ttl_s),
        max_workers=settings.chunk_max_workers,
    )


def build_extractive_use_case(
    settings: AppSettings | None = None,
    source: FeedbackSourcePort | None = None,
    cache: SummaryCachePort | None = None,
) -> SummarizeExtractive:
    """Build the extractive use case.

    Args:
        source: Overrides the configured feedback source (e.g. an inline corpus)
        cache: Shared content-hash cache; a fresh one is built when omitted
    """
    settings = settings or AppSettings()
    return SummarizeExtractive(
        source=source if source is not None else build_feedback_source(settings),
        embedding=build_embedding(settings),
        sentiment=build_sentiment(settings),
        cache=cache if cache is not None else build_cache(settings, "extractive"),
        clock=build_clock(),
        options=extractive_options(settings),
    )


def build_chunked_use_case(
    settings: AppSettings | None = None,
    source: FeedbackSourcePort | None = None,
    cache: SummaryCachePort | None = None,
) -> SummarizeChunked:
    settings = settings or AppSettings()
    return SummarizeChunked(
        source=source if source is not None else build_feedback_source(settings),
        llm=build_llm(settings),
        cache=cache if cache is not None else build_cache(settings, "chunked"),
        clock=build_clock(),
        options=chunked_options(settings),
    )
