"""Sentiment aggregation for the extractive path.

Labels arrive from the classifier already normalised to POSITIVE / NEGATIVE /
NEUTRAL; anything else is counted as neutral.
"""

from __future__ import annotations

from collections.abc import Sequence

from review_digest.domain.models import NEGATIVE, NEUTRAL, POSITIVE, SentimentStats
from review_digest.domain.services.segmentation import normalize_whitespace

DEFAULT_PROS_MAX = 3
DEFAULT_CONS_MAX = 3
SAMPLE_CAP = 250
OVERALL_MAX_LINES = 3


def normalize_label(label: str | None) -> str:
    value = (label or "").strip().upper()
    if value in (POSITIVE, "POS", "LABEL_2"):
        return POSITIVE
    if value in (NEGATIVE, "NEG", "LABEL_0"):
        return NEGATIVE
    return NEUTRAL


def tally(labels: Sequence[str]) -> SentimentStats:
    pos = sum(1 for lab in labels if lab == POSITIVE)
    neg = sum(1 for lab in labels if lab == NEGATIVE)
    return SentimentStats.from_counts(
        positive=pos, neutral=len(labels) - pos - neg, negative=neg, total=len(labels)
    )


def partition_pros_cons(
    lines: Sequence[str],
    labels: Sequence[str],
    pros_max: int = DEFAULT_PROS_MAX,
    cons_max: int = DEFAULT_CONS_MAX,
) -> tuple[list[str], list[str]]:
    """First-come-first-served split of selected lines into capped pros/cons."""
    pros: list[str] = []
    cons: list[str] = []
    for line, lab in zip(lines, labels, strict=True):
        if lab == POSITIVE and len(pros) < pros_max:
            pros.append(normalize_whitespace(line))
        elif lab == NEGATIVE and len(cons) < cons_max:
            cons.append(normalize_whitespace(line))
    return pros, cons


def build_overall(lines: Sequence[str], labels: Sequence[str]) -> str:
    """First positive, first negative, then a second positive; space-joined.

    Surfaces one strength and one weakness before elaborating.
    """
    paired = list(zip(lines, labels, strict=True))
    pos = [normalize_whitespace(line) for line, lab in paired if lab == POSITIVE]
    neg = [normalize_whitespace(line) for line, lab in paired if lab == NEGATIVE]
    pick: list[str] = []
    if pos:
        pick.append(pos[0])
    if neg:
        pick.append(neg[0])
    if len(pos) > 1:
        pick.append(pos[1])
    return " ".join(pick[:OVERALL_MAX_LINES])
