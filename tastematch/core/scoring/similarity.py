"""Cosine scores between preference and product embeddings.

All arithmetic runs in float64. A zero vector scores 0 against anything,
and vectors of different lengths are rejected rather than truncated.

    >>> from tastematch.core.scoring.similarity import cosine_similarity, round_score
    >>> round_score(cosine_similarity(product_vector, user_vector))
    0.83
"""

from __future__ import annotations

import math
from typing import List, Sequence, Union

import numpy as np

from tastematch.utils.exceptions import InvalidInputError, VectorDimensionError

VectorLike = Union[np.ndarray, Sequence[float]]


def _as_vector(vec: VectorLike, name: str) -> np.ndarray:
    if vec is None:
        raise InvalidInputError(f"{name} is required", field=name)
    arr = np.asarray(vec, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional", field=name, value=arr.shape)
    return arr


def cosine_similarity(
    vec_a: VectorLike,
    vec_b: VectorLike,
) -> float:
    """
    Score two embeddings: dot(a, b) / (|a| * |b|), unclamped.

    Args:
        vec_a: Product or preference embedding.
        vec_b: Embedding of the same length.

    Returns:
        A float in [-1, 1]; 0.0 when either norm is zero.

    Raises:
        VectorDimensionError: If vectors have different lengths.

    Example:
        >>> cosine_similarity([3, 4], [6, 8])
        1.0
        >>> cosine_similarity([0, 0], [1, 1])
        0.0
    """
    a = _as_vector(vec_a, "vec_a")
    b = _as_vector(vec_b, "vec_b")

    if a.shape != b.shape:
        raise VectorDimensionError(
            f"Vectors must have the same length: {a.shape[0]} vs {b.shape[0]}",
            expected=a.shape[0],
            actual=b.shape[0],
        )

    norm_a, norm_b = np.linalg.norm(a), np.linalg.norm(b)

    denominator = norm_a * norm_b
    if denominator == 0:
        return 0.0
    return float(np.dot(a, b) / denominator)


def batch_cosine_similarity(
    query: VectorLike,
    candidates: Union[np.ndarray, Sequence[Sequence[float]]],
) -> np.ndarray:
    """
    Score one product vector against a matrix of preference vectors.

    Gives the same per-row result as ``cosine_similarity``: rows with a
    zero norm (or a zero query) score exactly 0.

    Args:
        query: Vector of length d.
        candidates: n rows of length d.

    Returns:
        float64 array of n scores, in row order.

    Raises:
        VectorDimensionError: If any candidate length differs from the query.

    Example:
        >>> scores = batch_cosine_similarity(product_vector, user_matrix)
        >>> top = np.argsort(scores)[::-1][:10]
    """
    q = _as_vector(query, "query")

    rows: List[np.ndarray] = [np.asarray(row, dtype=np.float64) for row in candidates]
    if not rows:
        return np.zeros(0, dtype=np.float64)

    for index, row in enumerate(rows):
        if row.shape != q.shape:
            raise VectorDimensionError(
                f"Candidate {index} has length {row.size}, expected {q.size}",
                expected=q.size,
                actual=row.size,
            )

    c = np.vstack(rows)

    q_norm = np.linalg.norm(q)
    c_norms = np.linalg.norm(c, axis=1)

    denominators = c_norms * q_norm
    dots = c @ q

    scores = np.zeros(len(rows), dtype=np.float64)
    nonzero = denominators != 0
    scores[nonzero] = dots[nonzero] / denominators[nonzero]

    return scores


def round_score(similarity: float, digits: int = 2) -> float:
    """
    Round a similarity half-up (not to even) to ``digits`` decimals.

    Args:
        similarity: Raw similarity.
        digits: Number of decimals.

    Returns:
        The rounded similarity, e.g. 0.845 -> 0.85.
    """
    factor = 10 ** digits
    return math.floor(similarity * factor + 0.5) / factor
