"""
OpenAI implementation of the embedding service.

One outbound call per ``embed``; no retries. Transport and service
failures surface as EmbeddingGenerationError and the caller decides
whether to retry.

Example:
    >>> service = OpenAIEmbeddingService(api_key=os.environ["OPENAI_API_KEY"])
    >>> vector = service.embed("User prefers categories: Dresses.")
"""

from __future__ import annotations

import threading
from typing import List, Optional

from openai import OpenAI

from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.utils.exceptions import EmbeddingGenerationError, InvalidInputError
from tastematch.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"
DEFAULT_TIMEOUT_SECONDS = 15.0


class OpenAIEmbeddingService(EmbeddingServiceInterface):
    """
    Embedding service backed by the OpenAI embeddings endpoint.

    Attributes:
        model_name: The embedding model identifier.
        timeout: Upper bound in seconds for one call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[OpenAI] = None,
    ):
        """
        Initialize the service.

        Args:
            api_key: OpenAI API key. Ignored when ``client`` is given.
            model: Embedding model identifier.
            timeout: Request timeout in seconds.
            client: Pre-built client (mainly for tests).
        """
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> OpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                        max_retries=0,
                    )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def timeout(self) -> float:
        return self._timeout

    def embed(self, text: str) -> List[float]:
        """
        Generate an embedding vector from text.

        Args:
            text: Non-empty text.

        Returns:
            The embedding as a list of floats.

        Raises:
            InvalidInputError: If text is empty.
            EmbeddingGenerationError: If the OpenAI call fails.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text to embed cannot be empty", field="text")

        try:
            response = self.client.embeddings.create(
                model=self._model,
                input=text,
                encoding_format="float",
            )
            embedding = list(response.data[0].embedding)
        except Exception as e:
            logger.error(f"OpenAI embedding error: {e}")
            raise EmbeddingGenerationError(
                context={"model": self._model, "cause": str(e)},
            ) from e

        if not embedding:
            raise EmbeddingGenerationError(
                "Embedding service returned an empty vector",
                context={"model": self._model},
            )

        logger.debug(f"Generated embedding with {len(embedding)} dimensions")
        return embedding
