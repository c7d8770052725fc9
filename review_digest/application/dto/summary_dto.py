# review_digest/application/dto/summary_dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from review_digest.domain.services.chunking import DEFAULT_CHUNK_MAX_CHARS
from review_digest.domain.services.ranking import DEFAULT_K, DEFAULT_LAMBDA
from review_digest.domain.services.reduction import MAX_CONS, MAX_PROS, MAX_QUOTES
from review_digest.domain.services.scoring import DEFAULT_TAG_BOOST
from review_digest.domain.services.sentiment import (
    DEFAULT_CONS_MAX,
    DEFAULT_PROS_MAX,
    SAMPLE_CAP,
)

DEFAULT_SUMMARY_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class ExtractiveOptions:
    """
    Tuning knobs for the extractive strategy.

    - k: number of units selected by MMR (also the quote cap)
    - mmr_lambda: relevance vs. novelty trade-off (1.0 = pure relevance)
    - pros_max / cons_max: caps on the labelled buckets
    - tag_boost: extra weight for units mentioning one of their rating's tags
    - sample_cap: units classified for the sentiment breakdown
    - embed_batch_size / sentiment_batch_size: texts per collaborator call
    - max_workers: concurrent collaborator calls
    """

    k: int = DEFAULT_K
    mmr_lambda: float = DEFAULT_LAMBDA
    pros_max: int = DEFAULT_PROS_MAX
    cons_max: int = DEFAULT_CONS_MAX
    tag_boost: float = DEFAULT_TAG_BOOST
    sample_cap: int = SAMPLE_CAP
    embed_batch_size: int = 64
    sentiment_batch_size: int = 32
    max_workers: int = 4


@dataclass(frozen=True)
class ChunkedOptions:
    """Tuning knobs for the chunked (generative) strategy."""

    chunk_max_chars: int = DEFAULT_CHUNK_MAX_CHARS
    ttl: timedelta = DEFAULT_SUMMARY_TTL
    max_workers: int = 4
    max_pros: int = MAX_PROS
    max_cons: int = MAX_CONS
    max_quotes: int = MAX_QUOTES
