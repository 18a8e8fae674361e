# Synthesis Package
"""
Text synthesis for embedding and derivation of preference analytics.
"""

from .descriptor_synthesizer import (
    currency_symbol,
    synthesize_preference_text,
    synthesize_product_text,
    synthesize_text,
)
from .signal_deriver import build_preference_record, derive_enhanced_signals

__all__ = [
    "currency_symbol",
    "synthesize_preference_text",
    "synthesize_product_text",
    "synthesize_text",
    "build_preference_record",
    "derive_enhanced_signals",
]
