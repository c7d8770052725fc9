# review_digest/domain/services/ranking.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Sequence

from review_digest.domain.similarity import cosine

DEFAULT_K = 8
DEFAULT_LAMBDA = 0.7


def mmr_select(
    vectors: Sequence[Sequence[float]],
    scores: Sequence[float],
    k: int = DEFAULT_K,
    lambda_mult: float = DEFAULT_LAMBDA,
) -> list[int]:
    """
    Maximal Marginal Relevance over precomputed relevance scores.

    Returns up to k indices in selection order. Each round picks the candidate
    maximising lambda * score - (1 - lambda) * max cosine to anything already
    chosen; on ties the lowest index wins.

    - O(k * n) similarity computations; n is one subject's sentence count.
    - lambda_mult=1 reduces to a stable sort by score.
    """
    if k <= 0:
        return []

    selected: list[int] = []
    remaining: list[int] = list(range(len(vectors)))

    while remaining and len(selected) < k:
        best_idx = remaining[0]
        best_score = float("-inf")

        for i in remaining:
            penalty = 0.0
            if selected:
                # max similarity to any already selected item (diversity penalty)
                penalty = max(cosine(vectors[i], vectors[j]) for j in selected)

            score = lambda_mult * scores[i] - (1.0 - lambda_mult) * penalty
            if score > best_score:
                best_score = score
                best_idx = i

        selected.append(best_idx)
        remaining = [i for i in remaining if i != best_idx]

    return selected
