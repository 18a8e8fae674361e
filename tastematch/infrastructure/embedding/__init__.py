# Embedding Infrastructure Package
"""
Embedding service implementations.
"""

from .cached_embedding_service import CachedEmbeddingService
from .openai_embedding_service import OpenAIEmbeddingService

__all__ = ["CachedEmbeddingService", "OpenAIEmbeddingService"]
