"""
Match result entities produced by a similarity query. Never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .preference_record import PreferenceRecord
from .product_descriptor import ProductDescriptor


class MatchQuality(Enum):
    """Quality tier of a match, driven only by prior liked status."""

    EXCELLENT = "excellent"
    GOOD = "good"


@dataclass(frozen=True)
class MatchResult:
    """A user whose preference embedding is close enough to a product."""

    user_id: str
    similarity: float
    match_quality: MatchQuality
    previously_liked: bool
    user_preferences: PreferenceRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "similarity": self.similarity,
            "matchQuality": self.match_quality.value,
            "previouslyLiked": self.previously_liked,
            "userPreferences": self.user_preferences.to_dict(),
        }


@dataclass
class MatchEvaluation:
    """Ranked matches for one product vector."""

    matches: List[MatchResult] = field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return len(self.matches)


@dataclass
class MatchReport:
    """Matches for a catalog product looked up by slug."""

    product: ProductDescriptor
    matches: List[MatchResult]
    threshold: float

    @property
    def total_matches(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product": self.product.to_dict(),
            "matches": [m.to_dict() for m in self.matches],
            "totalMatches": self.total_matches,
            "threshold": self.threshold,
        }


@dataclass
class ProductEmbedding:
    """A catalog product together with its synthesized text and vector."""

    product: ProductDescriptor
    text_summary: str
    embedding: List[float]

    @property
    def embedding_dimensions(self) -> int:
        return len(self.embedding)
