# Scoring Package
"""
Similarity scoring between product and user preference embeddings.

Provides:
- cosine_similarity: Compute similarity between two embeddings
- batch_cosine_similarity: Similarity of one query against a population
- round_score: Half-up rounding used for reported similarities

Example:
    >>> from tastematch.core.scoring import cosine_similarity
    >>> sim = cosine_similarity(emb_a, emb_b)
"""

from .similarity import (
    VectorLike,
    batch_cosine_similarity,
    cosine_similarity,
    round_score,
)

__all__ = [
    "VectorLike",
    "cosine_similarity",
    "batch_cosine_similarity",
    "round_score",
]
