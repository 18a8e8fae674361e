"""Core matching components for TasteMatch."""

from .engine import MatchingEngine, build_engine
from .matching import MatchEvaluator
from .scoring import batch_cosine_similarity, cosine_similarity
from .synthesis import build_preference_record, derive_enhanced_signals, synthesize_text

__all__ = [
    "MatchingEngine",
    "build_engine",
    "MatchEvaluator",
    "cosine_similarity",
    "batch_cosine_similarity",
    "synthesize_text",
    "derive_enhanced_signals",
    "build_preference_record",
]
