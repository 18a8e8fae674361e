"""
Derivation of EnhancedSignals from a user's swipe history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from tastematch.domain.entities.preference_record import (
    BehaviorMetrics,
    BrandInsights,
    CategoryInsight,
    EnhancedSignals,
    PreferenceRecord,
    PriceConsciousness,
    PriceInsights,
    PriceRange,
    ProductInteraction,
)
from tastematch.utils.exceptions import InvalidInputError


PRICE_RANGE_LOWER_FACTOR = 0.8
PRICE_RANGE_UPPER_FACTOR = 1.3
DEFAULT_PRICE_RANGE_MAX = 10000
DEFAULT_CURRENCY = "₹"

PREFERRED_BRAND_MIN_AFFINITY = 0.7
PREFERRED_BRAND_MIN_LIKES = 2

HIGH_DISCOUNT_THRESHOLD = 15
MEDIUM_DISCOUNT_THRESHOLD = 5


@dataclass
class _Tally:
    likes: int = 0
    dislikes: int = 0

    @property
    def affinity(self) -> float:
        total = self.likes + self.dislikes
        return self.likes / total if total > 0 else 0.0


def _tally(interactions: Iterable[ProductInteraction], key: str) -> Dict[str, _Tally]:
    # dicts keep first-seen order
    tallies: Dict[str, _Tally] = {}
    for interaction in interactions:
        tally = tallies.setdefault(getattr(interaction, key), _Tally())
        if interaction.is_like():
            tally.likes += 1
        else:
            tally.dislikes += 1
    return tallies


def classify_price_consciousness(average_discount: float) -> PriceConsciousness:
    if average_discount > HIGH_DISCOUNT_THRESHOLD:
        return PriceConsciousness.HIGH
    if average_discount > MEDIUM_DISCOUNT_THRESHOLD:
        return PriceConsciousness.MEDIUM
    return PriceConsciousness.LOW


def derive_enhanced_signals(
    liked: Sequence[ProductInteraction],
    disliked: Sequence[ProductInteraction],
) -> EnhancedSignals:
    """
    Compute price, brand, category and behaviour analytics from swipes.

    Args:
        liked: Liked interactions in swipe order.
        disliked: Disliked interactions in swipe order.

    Returns:
        The derived EnhancedSignals.
    """
    liked = list(liked)
    disliked = list(disliked)

    liked_prices = [p.price for p in liked]
    if liked_prices:
        price_insights = PriceInsights(
            average_liked_price=sum(liked_prices) / len(liked_prices),
            price_range_min=min(liked_prices) * PRICE_RANGE_LOWER_FACTOR,
            price_range_max=max(liked_prices) * PRICE_RANGE_UPPER_FACTOR,
            currency=liked[0].currency or DEFAULT_CURRENCY,
            discount_sensitivity=sum(1 for p in liked if p.discount > 0) / len(liked),
        )
    else:
        price_insights = PriceInsights(
            average_liked_price=0,
            price_range_min=0,
            price_range_max=DEFAULT_PRICE_RANGE_MAX,
            currency=DEFAULT_CURRENCY,
            discount_sensitivity=0,
        )

    everything = liked + disliked

    brand_tallies = _tally(everything, "brand")
    brand_insights = BrandInsights(
        preferred_brands=tuple(
            brand
            for brand, tally in brand_tallies.items()
            if tally.affinity >= PREFERRED_BRAND_MIN_AFFINITY and tally.likes >= PREFERRED_BRAND_MIN_LIKES
        ),
        brand_affinity_scores={brand: tally.affinity for brand, tally in brand_tallies.items()},
    )

    category_insights = tuple(
        CategoryInsight(
            category_name=category,
            like_count=tally.likes,
            dislike_count=tally.dislikes,
            affinity_score=tally.affinity,
        )
        for category, tally in _tally(everything, "category").items()
    )

    total_swipes = len(liked) + len(disliked)
    like_rate = len(liked) / total_swipes if total_swipes > 0 else 0.0
    average_discount = sum(p.discount for p in liked) / len(liked) if liked else 0.0

    behavior_metrics = BehaviorMetrics(
        total_swipes=total_swipes,
        like_rate=like_rate,
        skip_rate=1 - like_rate,
        price_consciousness=classify_price_consciousness(average_discount),
        category_diversity=len({p.category for p in liked}),
    )

    return EnhancedSignals(
        price_insights=price_insights,
        brand_insights=brand_insights,
        category_insights=category_insights,
        behavior_metrics=behavior_metrics,
        liked_products_data=tuple(liked),
        disliked_products_data=tuple(disliked),
    )


def build_preference_record(
    selected_categories: Sequence[str],
    liked: Sequence[ProductInteraction],
    disliked: Sequence[ProductInteraction],
    price_range: Optional[PriceRange] = None,
    selected_brands: Sequence[str] = (),
) -> PreferenceRecord:
    """
    Assemble a PreferenceRecord with EnhancedSignals from raw swipes.

    Raises:
        InvalidInputError: If an interaction is filed under the wrong list.
    """
    wrong_liked: List[str] = [p.slug for p in liked if not p.is_like()]
    wrong_disliked: List[str] = [p.slug for p in disliked if p.is_like()]
    if wrong_liked or wrong_disliked:
        raise InvalidInputError(
            "Interaction type does not match the list it was submitted in",
            field="interactionType",
            value=wrong_liked + wrong_disliked,
        )

    return PreferenceRecord(
        selected_categories=tuple(selected_categories),
        liked_products=tuple(p.slug for p in liked),
        disliked_products=tuple(p.slug for p in disliked),
        price_range=price_range or PriceRange(),
        selected_brands=tuple(selected_brands),
        enhanced=derive_enhanced_signals(liked, disliked),
    )
