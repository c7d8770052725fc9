"""Structural fingerprint of a feedback corpus for the content-hash cache.

Only ids, votes, timestamps, stars and text LENGTHS enter the hash, never the
text itself. Editing a text without changing its length keeps the hash.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence

from review_digest.domain.models import SourceItem


def _rating_row(item: SourceItem) -> list[object]:
    return [item.id, item.votes, item.created_at or "", len(item.text), item.stars]


def _post_row(item: SourceItem) -> list[object]:
    return [item.id, item.created_at or "", len(item.text)]


def corpus_fingerprint(items: Sequence[SourceItem]) -> str:
    """sha256 over a canonical, order-independent corpus description."""
    ratings = sorted((it for it in items if it.kind == "rating"), key=lambda it: it.id)
    posts = sorted((it for it in items if it.kind == "post"), key=lambda it: it.id)
    key = json.dumps(
        {"r": [_rating_row(r) for r in ratings], "c": [_post_row(c) for c in posts]},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(key.encode("utf-8")).hexdigest()
