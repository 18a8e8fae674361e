# Domain Interfaces Package
"""
Abstract base classes defining contracts for infrastructure implementations.
"""

from .catalog_interface import CatalogProviderInterface
from .embedding_interface import EmbeddingServiceInterface
from .repository_interface import PreferenceStoreInterface

__all__ = ["CatalogProviderInterface", "EmbeddingServiceInterface", "PreferenceStoreInterface"]
