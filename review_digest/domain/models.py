# review_digest/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

SourceKind = Literal["rating", "post"]

POSITIVE = "POSITIVE"
NEGATIVE = "NEGATIVE"
NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class SourceItem:
    """
    Read-only snapshot of one piece of raw feedback about a subject.

    - id:          stable identifier (used for de-duplication and hashing)
    - kind:        "rating" (may carry stars, votes, tags) or "post"
    - text:        raw text, possibly empty
    - votes:       helpfulness votes (ratings only, never negative)
    - tags:        free-text tags attached to a rating
    - created_at:  ISO-8601 timestamp as received, or None
    - stars:       numeric score of a rating, or None
    """

    id: str
    kind: SourceKind
    text: str = ""
    votes: int = 0
    tags: tuple[str, ...] = ()
    created_at: str | None = None
    stars: float | None = None

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> SourceItem:
        """Build from a rating/post payload.

        Accepts both the rating shape (comment, date) and the post/comment
        shape (content, createdAt). A single string `tags` counts as one tag.

        Raises:
            ValueError: missing or blank id, or a non-numeric votes/stars value
        """
        kind: SourceKind
        if data.get("kind") in ("rating", "post"):
            kind = data["kind"]
        else:
            kind = "post" if "content" in data and "comment" not in data else "rating"
        text = data.get("text")
        if text is None:
            text = data.get("comment") if kind == "rating" else data.get("content")
        raw_id = data.get("id")
        if raw_id is None or not str(raw_id).strip():
            # ids drive de-duplication and the corpus hash
            raise ValueError("feedback item without an id")
        raw_tags = data.get("tags") or ()
        if isinstance(raw_tags, str):
            raw_tags = (raw_tags,)
        created = data.get("created_at") or data.get("createdAt") or data.get("date")
        stars = data.get("stars")
        return SourceItem(
            id=str(raw_id),
            kind=kind,
            text=text or "",
            votes=max(0, int(data.get("votes") or 0)),
            tags=tuple(str(t) for t in raw_tags),
            created_at=str(created) if created else None,
            stars=float(stars) if stars is not None else None,
        )


@dataclass(frozen=True)
class Unit:
    """One sentence-like span; `source` is a back-reference, not ownership."""

    text: str
    source: SourceItem


@dataclass(frozen=True)
class SentimentStats:
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    total: int = 0
    positive_percent: int = 0
    neutral_percent: int = 0
    negative_percent: int = 0

    @staticmethod
    def from_counts(positive: int, neutral: int, negative: int, total: int) -> SentimentStats:
        """Derive rounded percentages over `total` (all zero when total is 0)."""
        if total > 0:
            pp = _round_half_up(100 * positive / total)
            nup = _round_half_up(100 * neutral / total)
            np_ = _round_half_up(100 * negative / total)
        else:
            pp = nup = np_ = 0
        return SentimentStats(
            positive=positive,
            neutral=neutral,
            negative=negative,
            total=total,
            positive_percent=pp,
            neutral_percent=nup,
            negative_percent=np_,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
            "total": self.total,
            "positivePercent": self.positive_percent,
            "neutralPercent": self.neutral_percent,
            "negativePercent": self.negative_percent,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> SentimentStats:
        return SentimentStats(
            positive=int(data.get("positive", 0)),
            neutral=int(data.get("neutral", 0)),
            negative=int(data.get("negative", 0)),
            total=int(data.get("total", 0)),
            positive_percent=int(data.get("positivePercent", 0)),
            neutral_percent=int(data.get("neutralPercent", 0)),
            negative_percent=int(data.get("negativePercent", 0)),
        )


@dataclass(frozen=True)
class ChunkSummary:
    """Partial result of the generative path for one chunk."""

    pros: list[str]
    cons: list[str]
    stats: SentimentStats
    quotes: list[str]


@dataclass(frozen=True)
class Summary:
    """The engine's only output type (both strategies emit this shape)."""

    overall: str
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    stats: SentimentStats = field(default_factory=SentimentStats)
    quotes: list[str] = field(default_factory=list)
    hash: str | None = None

    @staticmethod
    def empty(overall: str = "") -> Summary:
        return Summary(overall=overall)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall,
            "pros": list(self.pros),
            "cons": list(self.cons),
            "stats": self.stats.to_dict(),
            "quotes": list(self.quotes),
            "hash": self.hash,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Summary:
        return Summary(
            overall=str(data.get("overall") or ""),
            pros=[str(p) for p in data.get("pros") or []],
            cons=[str(c) for c in data.get("cons") or []],
            stats=SentimentStats.from_dict(data.get("stats") or {}),
            quotes=[str(q) for q in data.get("quotes") or []],
            hash=data.get("hash"),
        )


@dataclass(frozen=True)
class CacheEntry:
    """Cached summary for one subject.

    The content-hash discipline fills `hash`; the TTL discipline fills
    `expires_at`. Entries are overwritten on recomputation.
    """

    summary: Summary
    hash: str | None = None
    expires_at: datetime | None = None

    def is_fresh(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at > now

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "hash": self.hash,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> CacheEntry:
        expires = data.get("expires_at")
        return CacheEntry(
            summary=Summary.from_dict(data.get("summary") or {}),
            hash=data.get("hash"),
            expires_at=datetime.fromisoformat(expires) if expires else None,
        )


def _round_half_up(x: float) -> int:
    # half-up, not round()'s half-to-even
    return math.floor(x + 0.5)
