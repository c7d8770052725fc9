# review_digest/domain/services/reduction.py
# Reduce step of the chunked strategy: pure aggregation of per-chunk results.
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from review_digest.domain.models import ChunkSummary, SentimentStats

MAX_PROS = 8
MAX_CONS = 8
MAX_QUOTES = 5


@dataclass(frozen=True)
class AggregatedSummary:
    """Everything of a Summary except the overall paragraph."""

    pros: list[str]
    cons: list[str]
    stats: SentimentStats
    quotes: list[str]


def _unique_trimmed(values: Iterable[str]) -> list[str]:
    # case-sensitive, trim-only dedup in first-seen order
    seen: dict[str, None] = {}
    for v in values:
        norm = v.strip()
        if norm:
            seen.setdefault(norm, None)
    return list(seen)


def aggregate_chunk_summaries(
    chunk_summaries: Sequence[ChunkSummary],
    fallback_total: int,
    max_pros: int = MAX_PROS,
    max_cons: int = MAX_CONS,
    max_quotes: int = MAX_QUOTES,
) -> AggregatedSummary:
    """Union pros/cons, sum stats and collect quotes across chunks.

    Args:
        chunk_summaries: Per-chunk results in chunk order
        fallback_total: Count of non-empty source texts, used when the
            reported totals sum to zero
    """
    positive = neutral = negative = total = 0
    quotes: list[str] = []
    for cs in chunk_summaries:
        positive += cs.stats.positive
        neutral += cs.stats.neutral
        negative += cs.stats.negative
        total += cs.stats.total
        for q in cs.quotes:
            if len(quotes) < max_quotes:
                quotes.append(q)

    if not total:
        total = fallback_total

    pros = _unique_trimmed(p for cs in chunk_summaries for p in cs.pros)[:max_pros]
    cons = _unique_trimmed(c for cs in chunk_summaries for c in cs.cons)[:max_cons]

    return AggregatedSummary(
        pros=pros,
        cons=cons,
        stats=SentimentStats.from_counts(positive, neutral, negative, total),
        quotes=quotes,
    )
