# Persist Preference Use Case
"""
Use case for storing a user's preference record with its embedding.

Synthesizes the preference text, embeds it, then creates or replaces the
user's single record in the preference store.
"""
from typing import Optional

from tastematch.core.synthesis.descriptor_synthesizer import synthesize_preference_text
from tastematch.domain.entities.preference_record import PreferenceRecord
from tastematch.domain.entities.stored_preference import StoredPreference
from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.domain.interfaces.repository_interface import PreferenceStoreInterface
from tastematch.utils.exceptions import InvalidInputError, MissingFieldError
from tastematch.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


class PersistPreferenceUseCase:
    """
    Use case for creating or updating a user's preference record.

    This use case:
    1. Validates the user id and the record (liked/disliked disjoint)
    2. Synthesizes the preference text and generates its embedding
    3. Checks whether the user already has a record
    4. Updates the existing record or inserts a new one

    If embedding generation fails nothing is written.
    """

    def __init__(
        self,
        embedding_service: EmbeddingServiceInterface,
        store: PreferenceStoreInterface,
    ):
        """
        Initialize the use case.

        Args:
            embedding_service: Service turning text into vectors.
            store: Preference store.
        """
        self.embedding_service = embedding_service
        self.store = store

    def execute(self, user_id: Optional[str], preferences: Optional[PreferenceRecord]) -> StoredPreference:
        """
        Store the preferences of one user.

        Args:
            user_id: The user the record belongs to.
            preferences: The full preference record (replaces any previous one).

        Returns:
            The stored record including store-assigned id and timestamps.

        Raises:
            MissingFieldError: If user id or preferences are missing.
            InvalidInputError: If a product is both liked and disliked.
            EmbeddingGenerationError: If the embedding call fails.
            PreferenceStoreError: If the store read or write fails.
        """
        if not user_id:
            raise MissingFieldError(field="user_id")
        if preferences is None:
            raise MissingFieldError("Preferences data is required", field="preferences")

        conflicts = preferences.conflicting_products()
        if conflicts:
            raise InvalidInputError(
                "A product cannot be both liked and disliked",
                field="likedProducts",
                value=conflicts,
            )

        logger.info(f"Processing preferences for user: {user_id}")

        text_summary = synthesize_preference_text(preferences)
        logger.debug(f"Generated text summary: {text_summary}")

        with log_execution_time(logger, f"embedding preferences of {user_id}"):
            embedding = self.embedding_service.embed(text_summary)
        logger.debug(f"Generated embedding with dimensions: {len(embedding)}")

        existing = self.store.get_preference(user_id)

        if existing is not None:
            stored = self.store.update_preference(existing, preferences, embedding, text_summary)
            logger.info(f"Updated preferences for user: {user_id}")
        else:
            stored = self.store.insert_preference(user_id, preferences, embedding, text_summary)
            logger.info(f"Created preferences for user: {user_id}")

        return stored
