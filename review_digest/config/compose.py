"""Dependency injection container for long-lived processes (HTTP app).

Models and caches are built lazily on first use and then shared by every
request, so the content-hash and TTL caches live as long as the process.
"""

from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.classifier_port import SentimentPort
from review_digest.application.ports.clock_port import ClockPort
from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.application.ports.llm_port import LLMPort
from review_digest.application.use_cases.summarize_chunked import SummarizeChunked
from review_digest.application.use_cases.summarize_extractive import SummarizeExtractive
from review_digest.config import composition
from review_digest.config.settings import AppSettings


class Container:
    """Dependency injection container for application components.

    Responsibilities:
    1. Read settings from environment (via AppSettings)
    2. Choose adapters based on settings (cache_backend, feedback_source)
    3. Own the two process-lifetime caches (content-hash and TTL)
    4. Inject dependencies into use cases
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        self.settings = settings or AppSettings()
        self._embedding: EmbeddingPort | None = None
        self._sentiment: SentimentPort | None = None
        self._llm: LLMPort | None = None
        self._clock: ClockPort | None = None
        self._source: FeedbackSourcePort | None = None
        self._extractive_cache: SummaryCachePort | None = None
        self._chunked_cache: SummaryCachePort | None = None

    # ===== Adapters =====

    def get_embedding(self) -> EmbeddingPort:
        if self._embedding is None:
            self._embedding = composition.build_embedding(self.settings)
        return self._embedding

    def get_sentiment(self) -> SentimentPort:
        if self._sentiment is None:
            self._sentiment = composition.build_sentiment(self.settings)
        return self._sentiment

    def get_llm(self) -> LLMPort:
        if self._llm is None:
            self._llm = composition.build_llm(self.settings)
        return self._llm

    def get_clock(self) -> ClockPort:
        if self._clock is None:
            self._clock = composition.build_clock()
        return self._clock

    def get_feedback_source(self) -> FeedbackSourcePort:
        if self._source is None:
            self._source = composition.build_feedback_source(self.settings)
        return self._source

    def get_extractive_cache(self) -> SummaryCachePort:
        if self._extractive_cache is None:
            self._extractive_cache = composition.build_cache(self.settings, "extractive")
        return self._extractive_cache

    def get_chunked_cache(self) -> SummaryCachePort:
        if self._chunked_cache is None:
            self._chunked_cache = composition.build_cache(self.settings, "chunked")
        return self._chunked_cache

    # ===== Use Cases =====

    def get_extractive_use_case(
        self, source: FeedbackSourcePort | None = None
    ) -> SummarizeExtractive:
        """Extractive use case; `source` replaces the configured one (inline corpus)."""
        return SummarizeExtractive(
            source=source if source is not None else self.get_feedback_source(),
            embedding=self.get_embedding(),
            sentiment=self.get_sentiment(),
            cache=self.get_extractive_cache(),
            clock=self.get_clock(),
            options=composition.extractive_options(self.settings),
        )

    def get_chunked_use_case(self, source: FeedbackSourcePort | None = None) -> SummarizeChunked:
        return SummarizeChunked(
            source=source if source is not None else self.get_feedback_source(),
            llm=self.get_llm(),
            cache=self.get_chunked_cache(),
            clock=self.get_clock(),
            options=composition.chunked_options(self.settings),
        )


def build_container(settings: AppSettings | None = None) -> Container:
    return Container(settings)
