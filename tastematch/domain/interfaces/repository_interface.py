"""
Abstract interface for the user preference store.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from tastematch.domain.entities.preference_record import PreferenceRecord
from tastematch.domain.entities.stored_preference import StoredPreference


class PreferenceStoreInterface(ABC):
    """
    Abstract base class for preference storage.

    Holds at most one record per user. The store assigns record ids and
    timestamps and serializes concurrent writes (last writer wins).
    """

    @abstractmethod
    def get_preference(self, user_id: str) -> Optional[StoredPreference]:
        """
        Retrieve a user's stored preference.

        Args:
            user_id: The user identifier.

        Returns:
            The StoredPreference if found, None otherwise.
        """
        pass

    @abstractmethod
    def insert_preference(
        self,
        user_id: str,
        preferences: PreferenceRecord,
        embedding: List[float],
        text_summary: str,
    ) -> StoredPreference:
        """
        Create the preference record for a user without one.

        Returns:
            The stored record with its assigned id and timestamps.
        """
        pass

    @abstractmethod
    def update_preference(
        self,
        existing: StoredPreference,
        preferences: PreferenceRecord,
        embedding: List[float],
        text_summary: str,
    ) -> StoredPreference:
        """
        Replace the preference record of an existing user.

        Args:
            existing: The record returned by ``get_preference``; its id and
                      creation time carry over without another read.

        Returns:
            The stored record; ``id`` and ``created_at`` are preserved.
        """
        pass

    @abstractmethod
    def list_preferences_with_embedding(self) -> List[StoredPreference]:
        """
        Return every stored preference that has an embedding.

        Users without a generated embedding are excluded.
        """
        pass
