"""Match evaluation of product embeddings against user preferences."""

from .match_evaluator import DEFAULT_THRESHOLD, MatchEvaluator

__all__ = ["DEFAULT_THRESHOLD", "MatchEvaluator"]
