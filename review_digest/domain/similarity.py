"""Pure vector functions for coverage scoring and diversity.

Vectors of any fixed dimension; no numpy so the domain stays stdlib-only.
"""

from collections.abc import Sequence
from math import sqrt

from .types import Score

EPS = 1e-8


def cosine(u: Sequence[float], v: Sequence[float]) -> Score:
    """Compute cosine similarity between two vectors.

    Args:
        u: First vector
        v: Second vector

    Returns:
        Cosine similarity; 0.0 when either vector is all zeros (EPS guard)
    """
    dot = sum(a * b for a, b in zip(u, v, strict=False))
    nu = sqrt(sum(a * a for a in u))
    nv = sqrt(sum(b * b for b in v))
    return dot / (nu * nv + EPS)


def mean_vector(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Element-wise mean (centroid) of equally sized vectors.

    Args:
        vectors: Non-ragged batch of vectors

    Returns:
        Centroid vector, or an empty list for an empty batch
    """
    if not vectors:
        return []
    dim = len(vectors[0])
    out = [0.0] * dim
    for vec in vectors:
        for i in range(dim):
            out[i] += vec[i]
    n = float(len(vectors))
    return [x / n for x in out]
