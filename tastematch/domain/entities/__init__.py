# Domain Entities Package
"""
Core business entities as dataclasses.
"""

from .match_result import (
    MatchEvaluation,
    MatchQuality,
    MatchReport,
    MatchResult,
    ProductEmbedding,
)
from .outcome import Outcome, OutcomeStatus
from .preference_record import (
    BehaviorMetrics,
    BrandInsights,
    CategoryInsight,
    EnhancedSignals,
    InteractionType,
    PreferenceRecord,
    PriceConsciousness,
    PriceInsights,
    PriceRange,
    ProductInteraction,
)
from .product_descriptor import ProductDescriptor
from .stored_preference import StoredPreference

__all__ = [
    "BehaviorMetrics",
    "BrandInsights",
    "CategoryInsight",
    "EnhancedSignals",
    "InteractionType",
    "MatchEvaluation",
    "MatchQuality",
    "MatchReport",
    "MatchResult",
    "Outcome",
    "OutcomeStatus",
    "PreferenceRecord",
    "PriceConsciousness",
    "PriceInsights",
    "PriceRange",
    "ProductDescriptor",
    "ProductEmbedding",
    "ProductInteraction",
    "StoredPreference",
]
