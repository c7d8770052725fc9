"""Chunked (generative) summary use case with TTL caching.

Pipeline:
1. TTL cache lookup (expired entries are recomputed in full)
2. Collect and format source texts, pack them into size-bounded chunks
3. Map: summarize every chunk concurrently; any failure fails the request
4. Reduce: merge pros/cons/stats/quotes
5. Final pass: one overall paragraph (fallback sentence when empty)
"""

from __future__ import annotations

import structlog

from review_digest.application.concurrency import run_all_or_fail
from review_digest.application.dto.chunk_dto import parse_chunk_summary
from review_digest.application.dto.summary_dto import ChunkedOptions
from review_digest.application.ports.cache_port import SummaryCachePort
from review_digest.application.ports.clock_port import ClockPort
from review_digest.application.ports.feedback_source_port import FeedbackSourcePort
from review_digest.application.ports.llm_port import LLMPort
from review_digest.application.prompts import (
    CHUNK_SYSTEM_PROMPT,
    NO_CONTENT_OVERALL,
    OVERALL_FALLBACK,
    OVERALL_SYSTEM_PROMPT,
    chunk_user_prompt,
    overall_user_prompt,
)
from review_digest.application.use_cases.collect_feedback import collect_feedback
from review_digest.domain.errors import DomainError, LLMError, ValidationError
from review_digest.domain.models import CacheEntry, ChunkSummary, Summary
from review_digest.domain.services.chunking import Chunk, pack_texts_to_chunks, source_texts
from review_digest.domain.services.reduction import AggregatedSummary, aggregate_chunk_summaries
from review_digest.domain.types import Result

logger = structlog.get_logger(__name__)


class SummarizeChunked:
    """Map-reduce summarization through the generative collaborator."""

    def __init__(
        self,
        source: FeedbackSourcePort,
        llm: LLMPort,
        cache: SummaryCachePort,
        clock: ClockPort,
        options: ChunkedOptions | None = None,
    ) -> None:
        self.source = source
        self.llm = llm
        self.cache = cache
        self.clock = clock
        self.options = options or ChunkedOptions()

    def summarize(self, subject_id: str) -> Result[Summary, DomainError]:
        if not subject_id or not subject_id.strip():
            return Result.failure(ValidationError("subject_id must not be empty"))
        log = logger.bind(subject_id=subject_id, strategy="chunked")

        now = self.clock.now()
        cached = self._read_cache(subject_id)
        if cached is not None and cached.is_fresh(now):
            log.info("summary_cache_hit")
            return Result.success(cached.summary)

        try:
            texts = source_texts(collect_feedback(self.source, subject_id))
        except DomainError as ex:
            return Result.failure(ex)

        if not texts:
            log.info("summary_no_content")
            summary = Summary.empty(NO_CONTENT_OVERALL)
            self._write_cache(subject_id, summary)
            return Result.success(summary)

        chunks = pack_texts_to_chunks(texts, self.options.chunk_max_chars)
        log.info("summary_chunked", texts=len(texts), chunks=len(chunks))

        try:
            partials = run_all_or_fail(
                lambda chunk: self._summarize_chunk(subject_id, chunk),
                chunks,
                self.options.max_workers,
            )
            aggregated = aggregate_chunk_summaries(
                partials,
                fallback_total=len(texts),
                max_pros=self.options.max_pros,
                max_cons=self.options.max_cons,
                max_quotes=self.options.max_quotes,
            )
            overall = self._generate_overall(subject_id, aggregated)
        except DomainError as ex:
            log.error("summary_failed", error=str(ex), error_type=type(ex).__name__)
            return Result.failure(ex)

        summary = Summary(
            overall=overall,
            pros=aggregated.pros,
            cons=aggregated.cons,
            stats=aggregated.stats,
            quotes=aggregated.quotes,
        )
        self._write_cache(subject_id, summary)
        return Result.success(summary)

    # ----- map / final pass -----

    def _summarize_chunk(self, subject_id: str, chunk: Chunk) -> ChunkSummary:
        logger.debug("chunk_summarize", subject_id=subject_id, chars=chunk.char_len)
        raw = self._complete(
            CHUNK_SYSTEM_PROMPT, chunk_user_prompt(subject_id, chunk.text), json_mode=True
        )
        parsed = parse_chunk_summary(raw)
        if not parsed.ok:
            assert parsed.error is not None
            logger.error(
                "chunk_parse_failed",
                subject_id=subject_id,
                error=str(parsed.error.cause),
                raw=parsed.error.raw[:200],
            )
            raise parsed.error
        assert parsed.value is not None
        return parsed.value

    def _generate_overall(self, subject_id: str, aggregated: AggregatedSummary) -> str:
        content = self._complete(
            OVERALL_SYSTEM_PROMPT, overall_user_prompt(subject_id, aggregated)
        ).strip()
        return content or OVERALL_FALLBACK

    def _complete(self, system: str, user: str, json_mode: bool = False) -> str:
        try:
            return self.llm.complete(system, user, json_mode=json_mode) or ""
        except DomainError:
            raise
        except Exception as ex:  # noqa: BLE001
            raise LLMError(f"llm completion failed: {ex}") from ex

    # ----- cache (never fatal) -----

    def _read_cache(self, subject_id: str) -> CacheEntry | None:
        try:
            return self.cache.get(subject_id)
        except Exception as ex:  # noqa: BLE001
            logger.warning("summary_cache_read_failed", subject_id=subject_id, error=str(ex))
            return None

    def _write_cache(self, subject_id: str, summary: Summary) -> None:
        entry = CacheEntry(summary=summary, expires_at=self.clock.now() + self.options.ttl)
        try:
            self.cache.set(subject_id, entry)
            logger.info("summary_cache_saved", subject_id=subject_id, strategy="chunked")
        except Exception as ex:  # noqa: BLE001
            logger.warning("summary_cache_write_failed", subject_id=subject_id, error=str(ex))
