"""TasteMatch - preference-to-product similarity matching.

Turns user preferences and catalog products into text embeddings and
finds the users to notify when a product matching their taste appears.
"""

__version__ = "0.1.0"
__author__ = "TasteMatch Team"
