"""
PreferenceRecord entity and the EnhancedSignals derived from swipe history.

The dictionary form (``to_dict`` / ``from_dict``) uses the camelCase keys
submitted by the onboarding client and kept in the preference store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class InteractionType(Enum):
    """Types of swipe interactions."""

    LIKE = "like"
    DISLIKE = "dislike"


class PriceConsciousness(Enum):
    """Three-level classification of how strongly a user reacts to discounts."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class PriceRange:
    """Declared price range; ``currency`` is an ISO code or a literal symbol."""

    min: float = 0
    max: float = 0
    currency: str = "INR"

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max, "currency": self.currency}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PriceRange":
        data = data or {}
        return cls(
            min=data.get("min", 0),
            max=data.get("max", 0),
            currency=data.get("currency") or "INR",
        )


@dataclass(frozen=True)
class ProductInteraction:
    """One like or dislike recorded while the user swiped through products."""

    slug: str
    name: str
    brand: str
    category: str
    price: float
    interaction_type: InteractionType
    marked_price: Optional[float] = None
    currency: str = "₹"
    discount: float = 0
    swipe_order: int = 0
    interaction_time: Optional[datetime] = None

    def is_like(self) -> bool:
        """Check if the interaction is a like."""
        return self.interaction_type == InteractionType.LIKE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "price": {
                "effective": self.price,
                "marked": self.marked_price if self.marked_price is not None else self.price,
                "currency": self.currency,
            },
            "discount": self.discount,
            "interactionType": self.interaction_type.value,
            "interactionTime": self.interaction_time.isoformat() if self.interaction_time else None,
            "swipeOrder": self.swipe_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductInteraction":
        price = data.get("price") or {}
        if not isinstance(price, dict):
            price = {"effective": price}

        interaction_time = data.get("interactionTime")
        if isinstance(interaction_time, str):
            try:
                interaction_time = datetime.fromisoformat(interaction_time.replace("Z", "+00:00"))
            except ValueError:
                interaction_time = None

        return cls(
            slug=data.get("slug", ""),
            name=data.get("name", ""),
            brand=data.get("brand", ""),
            category=data.get("category", ""),
            price=price.get("effective", 0) or 0,
            marked_price=price.get("marked"),
            currency=price.get("currency") or "₹",
            discount=data.get("discount", 0) or 0,
            interaction_type=InteractionType(data.get("interactionType", "like")),
            swipe_order=data.get("swipeOrder", 0) or 0,
            interaction_time=interaction_time,
        )


@dataclass(frozen=True)
class PriceInsights:
    average_liked_price: float = 0
    price_range_min: float = 0
    price_range_max: float = 10000
    currency: str = "₹"
    discount_sensitivity: float = 0


@dataclass(frozen=True)
class BrandInsights:
    preferred_brands: Tuple[str, ...] = ()
    brand_affinity_scores: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryInsight:
    category_name: str
    like_count: int = 0
    dislike_count: int = 0
    affinity_score: float = 0


@dataclass(frozen=True)
class BehaviorMetrics:
    total_swipes: int = 0
    like_rate: float = 0
    skip_rate: float = 1
    price_consciousness: PriceConsciousness = PriceConsciousness.LOW
    category_diversity: int = 0


@dataclass(frozen=True)
class EnhancedSignals:
    """
    Analytics derived from a user's swipe history.

    Computed once when preferences are submitted and recomputed wholesale
    on resubmission; never patched in place.
    """

    price_insights: PriceInsights = field(default_factory=PriceInsights)
    brand_insights: BrandInsights = field(default_factory=BrandInsights)
    category_insights: Tuple[CategoryInsight, ...] = ()
    behavior_metrics: BehaviorMetrics = field(default_factory=BehaviorMetrics)
    liked_products_data: Tuple[ProductInteraction, ...] = ()
    disliked_products_data: Tuple[ProductInteraction, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "likedProductsData": [p.to_dict() for p in self.liked_products_data],
            "dislikedProductsData": [p.to_dict() for p in self.disliked_products_data],
            "priceInsights": {
                "averageLikedPrice": self.price_insights.average_liked_price,
                "priceRangeMin": self.price_insights.price_range_min,
                "priceRangeMax": self.price_insights.price_range_max,
                "currency": self.price_insights.currency,
                "discountSensitivity": self.price_insights.discount_sensitivity,
            },
            "brandInsights": {
                "preferredBrands": list(self.brand_insights.preferred_brands),
                "brandAffinityScores": dict(self.brand_insights.brand_affinity_scores),
            },
            "categoryInsights": [
                {
                    "categoryName": c.category_name,
                    "likeCount": c.like_count,
                    "dislikeCount": c.dislike_count,
                    "affinityScore": c.affinity_score,
                }
                for c in self.category_insights
            ],
            "behaviorMetrics": {
                "totalSwipes": self.behavior_metrics.total_swipes,
                "likeRate": self.behavior_metrics.like_rate,
                "skipRate": self.behavior_metrics.skip_rate,
                "priceConsciousness": self.behavior_metrics.price_consciousness.value,
                "categoryDiversity": self.behavior_metrics.category_diversity,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnhancedSignals":
        price = data.get("priceInsights") or {}
        brand = data.get("brandInsights") or {}
        behavior = data.get("behaviorMetrics") or {}

        return cls(
            price_insights=PriceInsights(
                average_liked_price=price.get("averageLikedPrice", 0),
                price_range_min=price.get("priceRangeMin", 0),
                price_range_max=price.get("priceRangeMax", 10000),
                currency=price.get("currency") or "₹",
                discount_sensitivity=price.get("discountSensitivity", 0),
            ),
            brand_insights=BrandInsights(
                preferred_brands=tuple(brand.get("preferredBrands") or ()),
                brand_affinity_scores=dict(brand.get("brandAffinityScores") or {}),
            ),
            category_insights=tuple(
                CategoryInsight(
                    category_name=c.get("categoryName", ""),
                    like_count=c.get("likeCount", 0),
                    dislike_count=c.get("dislikeCount", 0),
                    affinity_score=c.get("affinityScore", 0),
                )
                for c in data.get("categoryInsights") or ()
            ),
            behavior_metrics=BehaviorMetrics(
                total_swipes=behavior.get("totalSwipes", 0),
                like_rate=behavior.get("likeRate", 0),
                skip_rate=behavior.get("skipRate", 1),
                price_consciousness=PriceConsciousness(behavior.get("priceConsciousness", "low")),
                category_diversity=behavior.get("categoryDiversity", 0),
            ),
            liked_products_data=tuple(
                ProductInteraction.from_dict(p) for p in data.get("likedProductsData") or ()
            ),
            disliked_products_data=tuple(
                ProductInteraction.from_dict(p) for p in data.get("dislikedProductsData") or ()
            ),
        )


@dataclass(frozen=True)
class PreferenceRecord:
    """
    A user's declared preferences and swipe history.

    ``liked_products`` and ``disliked_products`` hold product slugs in
    interaction order and are expected to be disjoint.
    """

    selected_categories: Tuple[str, ...] = ()
    liked_products: Tuple[str, ...] = ()
    disliked_products: Tuple[str, ...] = ()
    price_range: PriceRange = field(default_factory=PriceRange)
    selected_brands: Tuple[str, ...] = ()
    enhanced: Optional[EnhancedSignals] = None

    def __post_init__(self) -> None:
        # Accept lists from callers; store tuples so the record stays immutable
        for name in ("selected_categories", "liked_products", "disliked_products", "selected_brands"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    def conflicting_products(self) -> List[str]:
        """Return slugs present in both the liked and disliked sequences."""
        disliked = set(self.disliked_products)
        return [slug for slug in self.liked_products if slug in disliked]

    def has_liked(self, slug: str) -> bool:
        return slug in self.liked_products

    def has_disliked(self, slug: str) -> bool:
        return slug in self.disliked_products

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "selectedCategories": list(self.selected_categories),
            "likedProducts": list(self.liked_products),
            "dislikedProducts": list(self.disliked_products),
            "priceRange": self.price_range.to_dict(),
            "selectedBrands": list(self.selected_brands),
        }
        if self.enhanced is not None:
            data["enhancedData"] = self.enhanced.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PreferenceRecord":
        data = data or {}
        enhanced = data.get("enhancedData")
        return cls(
            selected_categories=tuple(data.get("selectedCategories") or ()),
            liked_products=tuple(data.get("likedProducts") or ()),
            disliked_products=tuple(data.get("dislikedProducts") or ()),
            price_range=PriceRange.from_dict(data.get("priceRange")),
            selected_brands=tuple(data.get("selectedBrands") or ()),
            enhanced=EnhancedSignals.from_dict(enhanced) if enhanced else None,
        )
