# Use Cases Package
"""
Application use cases (business logic).

Use cases orchestrate the flow of data between domain entities, the
embedding service, the catalog and the preference store.
"""

from tastematch.core.use_cases.persist_preference import PersistPreferenceUseCase
from tastematch.core.use_cases.product_similarity import (
    FindSimilarUsersUseCase,
    GetProductEmbeddingUseCase,
)

__all__ = [
    "PersistPreferenceUseCase",
    "GetProductEmbeddingUseCase",
    "FindSimilarUsersUseCase",
]
