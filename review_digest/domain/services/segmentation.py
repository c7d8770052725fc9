from __future__ import annotations

import re
from collections.abc import Sequence

from review_digest.domain.models import SourceItem, Unit

MIN_UNIT_CHARS = 25
MAX_UNIT_CHARS = 280

# sentence end, whitespace, then uppercase / digit / opening quote
_SENT_END = re.compile(r"(?<=[.!?])\s+(?=[A-Z0-9\"“])")


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def split_sentences(
    text: str, min_chars: int = MIN_UNIT_CHARS, max_chars: int = MAX_UNIT_CHARS
) -> list[str]:
    """Split raw feedback into sentence-like spans within the length window.

    Spans outside [min_chars, max_chars] are dropped; a text may yield nothing.
    """
    text = normalize_whitespace(text)
    if not text:
        return []
    parts = (s.strip() for s in _SENT_END.split(text))
    return [s for s in parts if min_chars <= len(s) <= max_chars]


def segment_sources(items: Sequence[SourceItem]) -> list[Unit]:
    """Segment every item with text, keeping a back-reference to its source."""
    units: list[Unit] = []
    for item in items:
        if not item.has_text:
            continue
        units.extend(Unit(text=s, source=item) for s in split_sentences(item.text))
    return units
