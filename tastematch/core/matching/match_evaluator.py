"""Match evaluation of a product embedding against stored user preferences.

Scores the whole population at once, then applies the business rules:
users who disliked the product are never matched, users below the
threshold are dropped, and users who liked the product are tiered as
excellent matches.
"""

from numbers import Real
from typing import Iterable, List, Optional, Sequence, Tuple

from tastematch.core.scoring.similarity import batch_cosine_similarity, round_score
from tastematch.domain.entities.match_result import MatchEvaluation, MatchQuality, MatchResult
from tastematch.domain.entities.product_descriptor import ProductDescriptor
from tastematch.domain.entities.stored_preference import StoredPreference
from tastematch.utils.exceptions import InvalidInputError
from tastematch.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 0.7


def _validate_threshold(threshold: float) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise InvalidInputError("Threshold must be a number", field="threshold", value=threshold)
    if not -1.0 <= float(threshold) <= 1.0:
        raise InvalidInputError("Threshold must be within [-1, 1]", field="threshold", value=threshold)
    return float(threshold)


class MatchEvaluator:
    """Rank users whose preference embeddings match a product embedding."""

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        """Initialize match evaluator.

        Args:
            threshold: Default minimum similarity, overridable per call
        """
        self.threshold = _validate_threshold(threshold)

        logger.info(f"Initialized MatchEvaluator with threshold={self.threshold:.2f}")

    def evaluate(
        self,
        product_vector: Sequence[float],
        product: ProductDescriptor,
        population: Optional[Iterable[StoredPreference]],
        threshold: Optional[float] = None,
    ) -> MatchEvaluation:
        """Evaluate a product against every user in the population.

        Args:
            product_vector: Embedding of the product text
            product: The product the vector was generated for
            population: Stored preferences; entries without an embedding are skipped
            threshold: Minimum similarity for this call (defaults to self.threshold)

        Returns:
            MatchEvaluation ranked by descending similarity, ties broken by user id

        Raises:
            InvalidInputError: If the product, its vector or the threshold is malformed
            VectorDimensionError: If a stored embedding has a different length
        """
        if not isinstance(product, ProductDescriptor) or not product.slug:
            raise InvalidInputError("A product descriptor with a slug is required", field="product")
        if product_vector is None or len(product_vector) == 0:
            raise InvalidInputError("Product embedding is required", field="product_vector")

        threshold = self.threshold if threshold is None else _validate_threshold(threshold)

        candidates = [entry for entry in (population or ()) if entry.has_embedding()]
        if not candidates:
            logger.info(f"No users with embeddings to match against '{product.slug}'")
            return MatchEvaluation(matches=[])

        logger.info(f"Checking {len(candidates)} users for '{product.slug}' (threshold={threshold:.2f})")

        with log_execution_time(logger, f"scoring {len(candidates)} users"):
            scores = batch_cosine_similarity(product_vector, [c.embedding for c in candidates])

        scored: List[Tuple[float, StoredPreference]] = []
        excluded_disliked = 0

        for candidate, score in zip(candidates, scores):
            if candidate.preferences.has_disliked(product.slug):
                excluded_disliked += 1
                continue
            # The rounded, reported similarity must also reach the threshold
            if score < threshold or round_score(score) < threshold:
                continue
            scored.append((float(score), candidate))

        # Full-precision scores drive the order; user id makes ties deterministic
        scored.sort(key=lambda pair: (-pair[0], pair[1].user_id))

        matches = [
            MatchResult(
                user_id=candidate.user_id,
                similarity=round_score(score),
                match_quality=(
                    MatchQuality.EXCELLENT
                    if candidate.preferences.has_liked(product.slug)
                    else MatchQuality.GOOD
                ),
                previously_liked=candidate.preferences.has_liked(product.slug),
                user_preferences=candidate.preferences,
            )
            for score, candidate in scored
        ]

        if excluded_disliked:
            logger.debug(f"Excluded {excluded_disliked} users who disliked '{product.slug}'")
        logger.info(f"Found {len(matches)} matches for '{product.slug}'")

        return MatchEvaluation(matches=matches)
