# Database Infrastructure Package
"""
Preference store implementations.

Example:
    >>> from tastematch.infrastructure.database import ChromaPreferenceStore
    >>> store = ChromaPreferenceStore(persist_directory="./data/chroma")
"""

from .chroma_preference_store import ChromaPreferenceStore

__all__ = ["ChromaPreferenceStore"]
