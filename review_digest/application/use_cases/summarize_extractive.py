"""Extractive summary use case with content-hash caching.

Pipeline: collect -> segment -> embed + score -> MMR -> sentiment -> summary.
The cached summary is reused for as long as the corpus fingerprint (ids,
votes, dates, stars, text lengths) stays the same.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from review_digest.application.concurrency import batched, run_ordered
from review_digest.application.dto.summary_dto import ExtractiveOptions
from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.classifier_port import SentimentPort
from review_digest.application.ports.clock_port import ClockPort
from review_digest.application.ports.embedding_port import EmbeddingPort
from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.application.use_cases.collect_feedback import collect_feedback, has_any_text
from review_digest.domain.errors import (
    DomainError,
    EmbeddingError,
    SentimentError,
    ValidationError,
)
from review_digest.domain.models import CacheEntry, SourceItem, Summary
from review_digest.domain.services.fingerprint import corpus_fingerprint
from review_digest.domain.services.ranking import mmr_select
from review_digest.domain.services.scoring import ScoringParams, combined_scores
from review_digest.domain.services.segmentation import normalize_whitespace, segment_sources
from review_digest.domain.services.sentiment import (
    build_overall,
    normalize_label,
    partition_pros_cons,
    tally,
)
from review_digest.domain.types import Result

logger = structlog.get_logger(__name__)


class SummarizeExtractive:
    """
    Application use case for the extractive strategy.
    Uses only ports; collaborator failures come back as Result failures, cache
    failures are logged and ignored.
    """

    def __init__(
        self,
        source: FeedbackSourcePort,
        embedding: EmbeddingPort,
        sentiment: SentimentPort,
        cache: SummaryCachePort,
        clock: ClockPort,
        options: ExtractiveOptions | None = None,
    ) -> None:
        self.source = source
        self.embedding = embedding
        self.sentiment = sentiment
        self.cache = cache
        self.clock = clock
        self.options = options or ExtractiveOptions()

    def summarize(self, subject_id: str) -> Result[Summary, DomainError]:
        # 1) Validate
        if not subject_id or not subject_id.strip():
            return Result.failure(ValidationError("subject_id must not be empty"))
        log = logger.bind(subject_id=subject_id, strategy="extractive")

        # 2) Collect
        try:
            items = collect_feedback(self.source, subject_id)
        except DomainError as ex:
            return Result.failure(ex)

        # 3) Nothing to summarize: no collaborator call, nothing cached
        if not has_any_text(items):
            log.info("summary_no_content", items=len(items))
            return Result.success(Summary.empty())

        # 4) Content-hash cache
        fingerprint = corpus_fingerprint(items)
        cached = self._read_cache(subject_id)
        if cached is not None and cached.hash == fingerprint:
            log.info("summary_cache_hit", hash=fingerprint[:12])
            return Result.success(cached.summary)
        log.info("summary_cache_miss", hash=fingerprint[:12])

        # 5) Compute
        try:
            summary = self._compute(items, fingerprint)
        except DomainError as ex:
            log.error("summary_failed", error=str(ex), error_type=type(ex).__name__)
            return Result.failure(ex)

        # 6) Save (non-fatal)
        self._write_cache(subject_id, CacheEntry(summary=summary, hash=fingerprint))
        return Result.success(summary)

    # ----- pipeline -----

    def _compute(self, items: Sequence[SourceItem], fingerprint: str) -> Summary:
        opts = self.options
        units = segment_sources(items)
        if not units:
            return Summary(overall="", hash=fingerprint)

        texts = [u.text for u in units]
        vectors = self._embed(texts)
        scores = combined_scores(
            units, vectors, self.clock.now(), ScoringParams(tag_boost=opts.tag_boost)
        )
        picked = [texts[i] for i in mmr_select(vectors, scores, opts.k, opts.mmr_lambda)]

        sample_labels = self._classify(texts[: opts.sample_cap])
        picked_labels = self._classify(picked)

        pros, cons = partition_pros_cons(picked, picked_labels, opts.pros_max, opts.cons_max)
        return Summary(
            overall=build_overall(picked, picked_labels),
            pros=pros,
            cons=cons,
            stats=tally(sample_labels),
            quotes=[normalize_whitespace(t) for t in picked],
            hash=fingerprint,
        )

    def _embed(self, texts: list[str]) -> list[list[float]]:
        batches = batched(texts, self.options.embed_batch_size)
        try:
            results = run_ordered(self.embedding.embed_texts, batches, self.options.max_workers)
        except DomainError:
            raise
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"embedding failed: {ex}") from ex
        vectors = [list(v) for batch in results for v in batch]
        if len(vectors) != len(texts):
            raise EmbeddingError(f"expected {len(texts)} vectors, got {len(vectors)}")
        return vectors

    def _classify(self, texts: list[str]) -> list[str]:
        if not texts:
            return []
        batches = batched(texts, self.options.sentiment_batch_size)
        try:
            results = run_ordered(self.sentiment.classify, batches, self.options.max_workers)
        except DomainError:
            raise
        except Exception as ex:  # noqa: BLE001
            raise SentimentError(f"sentiment classification failed: {ex}") from ex
        labels = [normalize_label(ls.label) for batch in results for ls in batch]
        if len(labels) != len(texts):
            raise SentimentError(f"expected {len(texts)} labels, got {len(labels)}")
        return labels

    # ----- cache (never fatal) -----

    def _read_cache(self, subject_id: str) -> CacheEntry | None:
        try:
            return self.cache.get(subject_id)
        except Exception as ex:  # noqa: BLE001
            logger.warning("summary_cache_read_failed", subject_id=subject_id, error=str(ex))
            return None

    def _write_cache(self, subject_id: str, entry: CacheEntry) -> None:
        try:
            self.cache.set(subject_id, entry)
            logger.info("summary_cache_saved", subject_id=subject_id, strategy="extractive")
        except Exception as ex:  # noqa: BLE001
            logger.warning("summary_cache_write_failed", subject_id=subject_id, error=str(ex))
