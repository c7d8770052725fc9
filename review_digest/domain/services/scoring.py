# review_digest/domain/services/scoring.py
# Pure domain services: no I/O, deterministic ("now" is always passed in).
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from review_digest.domain.models import Unit
from review_digest.domain.similarity import cosine, mean_vector

# No reputation signal exists yet; every author is treated as mid-reputation.
# repFactor = 0.5 + 0.5 * reputation keeps the formula ready for a real one.
PLACEHOLDER_REPUTATION = 0.5

# Age assumed for feedback without a usable timestamp.
DEFAULT_AGE_DAYS = 30.0

# Same-day feedback is scored as if it were one day old.
MIN_AGE_DAYS = 1.0

DEFAULT_TAG_BOOST = 0.10

_SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class ScoringParams:
    tag_boost: float = DEFAULT_TAG_BOOST
    reputation: float = PLACEHOLDER_REPUTATION
    default_age_days: float = DEFAULT_AGE_DAYS
    min_age_days: float = MIN_AGE_DAYS


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def age_days(created_at: str | None, now: datetime, p: ScoringParams) -> float:
    ts = parse_timestamp(created_at)
    if ts is None:
        return p.default_age_days
    return max(p.min_age_days, (now - ts).total_seconds() / _SECONDS_PER_DAY)


def like_factor(votes: int) -> float:
    return 1.0 + math.log10(1 + max(0, votes))


def rep_factor(p: ScoringParams) -> float:
    return 0.5 + 0.5 * p.reputation


def time_decay(age: float) -> float:
    return 1.0 / math.sqrt(age)


def tag_factor(unit: Unit, p: ScoringParams) -> float:
    """1 + boost when the unit mentions one of its rating's tags (case-insensitive)."""
    src = unit.source
    if src.kind != "rating" or not src.tags:
        return 1.0
    lower = unit.text.lower()
    if any(tag.lower() in lower for tag in src.tags if tag):
        return 1.0 + p.tag_boost
    return 1.0


def unit_weight(unit: Unit, now: datetime, p: ScoringParams | None = None) -> float:
    """likeFactor x repFactor x timeDecay x tagBoost for one unit."""
    p = p or ScoringParams()
    votes = unit.source.votes if unit.source.kind == "rating" else 0
    return (
        like_factor(votes)
        * rep_factor(p)
        * time_decay(age_days(unit.source.created_at, now, p))
        * tag_factor(unit, p)
    )


def coverage_scores(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Cosine of every vector to the batch centroid."""
    centroid = mean_vector(vectors)
    return [cosine(v, centroid) for v in vectors]


def combined_scores(
    units: Sequence[Unit],
    vectors: Sequence[Sequence[float]],
    now: datetime,
    p: ScoringParams | None = None,
) -> list[float]:
    """coverage x weight per unit; the only ranking signal fed into MMR."""
    p = p or ScoringParams()
    coverage = coverage_scores(vectors)
    return [c * unit_weight(u, now, p) for c, u in zip(coverage, units, strict=True)]
