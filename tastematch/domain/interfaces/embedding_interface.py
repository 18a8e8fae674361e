"""
Abstract interface for text embedding services.
"""

from abc import ABC, abstractmethod
from typing import List


class EmbeddingServiceInterface(ABC):
    """
    Abstract base class for embedding services.

    Turns a non-empty text into a fixed-dimension vector. Vectors are only
    comparable when produced by the same model.
    """

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Generate an embedding vector from text.

        Args:
            text: Non-empty text to embed.

        Returns:
            The embedding as a list of floats.

        Raises:
            InvalidInputError: If text is empty.
            EmbeddingGenerationError: If the service call fails.
        """
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model name/identifier."""
        pass
