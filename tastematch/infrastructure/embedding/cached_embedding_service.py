"""
Content-addressed cache in front of an embedding service.

Vectors are keyed by the SHA-256 of the model name and the exact text, so
unchanged text always maps to the vector first produced for it.
"""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from typing import List

from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 1024


class CachedEmbeddingService(EmbeddingServiceInterface):
    """LRU cache decorator for any EmbeddingServiceInterface."""

    def __init__(self, inner: EmbeddingServiceInterface, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._inner = inner
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, List[float]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def model_name(self) -> str:
        return self._inner.model_name

    def cache_key(self, text: str) -> str:
        digest = hashlib.sha256()
        digest.update(self.model_name.encode("utf-8"))
        digest.update(b"\x00")
        digest.update(text.encode("utf-8"))
        return digest.hexdigest()

    def embed(self, text: str) -> List[float]:
        key = self.cache_key(text) if isinstance(text, str) else None

        if key is not None:
            with self._lock:
                cached = self._entries.get(key)
                if cached is not None:
                    self._entries.move_to_end(key)
                    self.hits += 1
                    return list(cached)

        # Errors (including empty text) propagate from the wrapped service uncached
        vector = self._inner.embed(text)
        if key is None:
            return vector

        with self._lock:
            self.misses += 1
            self._entries[key] = list(vector)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

        logger.debug(f"Cached embedding {key[:12]} ({len(self._entries)} entries)")
        return vector

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
