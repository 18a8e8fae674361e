"""
ChromaDB implementation of the preference store.

Stores one record per user in a single collection:
- id: the user id (unique per user)
- embedding: the preference embedding
- document: the synthesized text summary
- metadata: record id, JSON-encoded preference record, timestamps

Note:
    ChromaDB metadata only accepts scalar values, so the preference
    record is stored as a JSON string.

Example:
    >>> store = ChromaPreferenceStore(persist_directory="./data/chroma")
    >>> store.insert_preference("user-1", record, vector, text)
    >>> population = store.list_preferences_with_embedding()
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import chromadb
from chromadb.config import Settings as ChromaSettings

from tastematch.domain.entities.preference_record import PreferenceRecord
from tastematch.domain.entities.stored_preference import StoredPreference, utc_now
from tastematch.domain.interfaces.repository_interface import PreferenceStoreInterface
from tastematch.utils.exceptions import PreferenceStoreError
from tastematch.utils.logger import get_logger, log_exception

logger = get_logger(__name__)


# ============================================
# Constants
# ============================================

DEFAULT_COLLECTION_NAME = "user_preferences"
IN_MEMORY = ":memory:"

# Distance function for the collection index
DISTANCE_FUNCTION = "cosine"


# ============================================
# Helper Functions
# ============================================

def _parse_datetime(value: Any) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            logger.warning(f"Unparseable timestamp in preference metadata: {value!r}")
    return utc_now()


def _to_metadata(record_id: str, user_id: str, preferences: PreferenceRecord,
                 created_at: datetime, updated_at: datetime) -> Dict[str, Any]:
    return {
        "record_id": record_id,
        "user_id": user_id,
        "preferences": json.dumps(preferences.to_dict(), ensure_ascii=False),
        "created_at": created_at.isoformat(),
        "updated_at": updated_at.isoformat(),
    }


def _to_stored(user_id: str, metadata: Dict[str, Any], embedding: Any, document: Optional[str]) -> StoredPreference:
    metadata = metadata or {}
    try:
        preferences = PreferenceRecord.from_dict(json.loads(metadata.get("preferences") or "{}"))
        vector = [float(x) for x in embedding] if embedding is not None else None
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        log_exception(logger, f"decode preferences of {user_id}", e)
        raise PreferenceStoreError(f"Stored preferences are corrupt: {e}", user_id=user_id) from e

    return StoredPreference(
        id=metadata.get("record_id", ""),
        user_id=metadata.get("user_id") or user_id,
        preferences=preferences,
        embedding=vector,
        text_summary=document or "",
        created_at=_parse_datetime(metadata.get("created_at")),
        updated_at=_parse_datetime(metadata.get("updated_at")),
    )


def _column(result: Dict[str, Any], key: str, size: int) -> List[Any]:
    values = result.get(key)
    if values is None:
        return [None] * size
    return list(values)


# ============================================
# ChromaPreferenceStore Implementation
# ============================================

class ChromaPreferenceStore(PreferenceStoreInterface):
    """
    ChromaDB-based storage for user preference records and embeddings.

    Attributes:
        collection: The underlying ChromaDB collection.
    """

    def __init__(
        self,
        persist_directory: str = IN_MEMORY,
        collection_name: str = DEFAULT_COLLECTION_NAME,
        client: Optional[Any] = None,
    ):
        """
        Initialize ChromaDB preference store.

        Args:
            persist_directory: Path for database persistence, or ":memory:"
                               for an ephemeral client.
            collection_name: Name of the preference collection.
            client: Pre-built ChromaDB client (overrides persist_directory).

        Raises:
            PreferenceStoreError: If ChromaDB initialization fails.
        """
        self._collection_name = collection_name

        try:
            if client is not None:
                self._client = client
            elif persist_directory == IN_MEMORY:
                logger.info("Initializing in-memory ChromaDB")
                self._client = chromadb.EphemeralClient(
                    settings=ChromaSettings(anonymized_telemetry=False, allow_reset=True),
                )
            else:
                path = Path(persist_directory)
                path.mkdir(parents=True, exist_ok=True)
                logger.info(f"Initializing ChromaDB at: {path}")
                self._client = chromadb.PersistentClient(
                    path=str(path),
                    settings=ChromaSettings(anonymized_telemetry=False, allow_reset=True),
                )

            self._collection = self._client.get_or_create_collection(
                name=collection_name,
                metadata={
                    "hnsw:space": DISTANCE_FUNCTION,
                    "description": "User preference embeddings",
                },
                embedding_function=None,
            )

            logger.info(f"ChromaDB preference store ready: {self._collection.count()} records")

        except Exception as e:
            logger.error(f"Failed to initialize ChromaDB: {e}")
            raise PreferenceStoreError(f"ChromaDB initialization failed: {e}") from e

    @property
    def collection(self) -> Any:
        """Return the preference collection."""
        return self._collection

    def count(self) -> int:
        """Return the number of stored preference records."""
        return self._collection.count()

    def get_preference(self, user_id: str) -> Optional[StoredPreference]:
        """Retrieve a user's stored preference, or None if absent."""
        try:
            result = self._collection.get(
                ids=[user_id],
                include=["embeddings", "metadatas", "documents"],
            )
        except Exception as e:
            log_exception(logger, f"get preferences of {user_id}", e)
            raise PreferenceStoreError(f"Failed to read preferences: {e}", user_id=user_id) from e

        ids = list(result.get("ids") or [])
        if not ids:
            return None

        return _to_stored(
            user_id,
            _column(result, "metadatas", 1)[0],
            _column(result, "embeddings", 1)[0],
            _column(result, "documents", 1)[0],
        )

    def insert_preference(
        self,
        user_id: str,
        preferences: PreferenceRecord,
        embedding: List[float],
        text_summary: str,
    ) -> StoredPreference:
        """Create the preference record for a new user."""
        now = utc_now()
        record_id = uuid.uuid4().hex

        try:
            self._collection.add(
                ids=[user_id],
                embeddings=[list(embedding)],
                metadatas=[_to_metadata(record_id, user_id, preferences, now, now)],
                documents=[text_summary],
            )
        except Exception as e:
            log_exception(logger, f"insert preferences of {user_id}", e)
            raise PreferenceStoreError(f"Failed to create preferences: {e}", user_id=user_id) from e

        logger.debug(f"Inserted preferences {record_id} for {user_id}")
        return StoredPreference(
            id=record_id,
            user_id=user_id,
            preferences=preferences,
            embedding=list(embedding),
            text_summary=text_summary,
            created_at=now,
            updated_at=now,
        )

    def update_preference(
        self,
        existing: StoredPreference,
        preferences: PreferenceRecord,
        embedding: List[float],
        text_summary: str,
    ) -> StoredPreference:
        """Replace the preference record of an existing user."""
        user_id = existing.user_id
        now = utc_now()

        try:
            self._collection.upsert(
                ids=[user_id],
                embeddings=[list(embedding)],
                metadatas=[_to_metadata(existing.id, user_id, preferences, existing.created_at, now)],
                documents=[text_summary],
            )
        except Exception as e:
            log_exception(logger, f"update preferences of {user_id}", e)
            raise PreferenceStoreError(f"Failed to update preferences: {e}", user_id=user_id) from e

        logger.debug(f"Updated preferences {existing.id} for {user_id}")
        return StoredPreference(
            id=existing.id,
            user_id=user_id,
            preferences=preferences,
            embedding=list(embedding),
            text_summary=text_summary,
            created_at=existing.created_at,
            updated_at=now,
        )

    def list_preferences_with_embedding(self) -> List[StoredPreference]:
        """Return every stored preference that has an embedding."""
        try:
            result = self._collection.get(include=["embeddings", "metadatas", "documents"])
        except Exception as e:
            log_exception(logger, "list preferences", e)
            raise PreferenceStoreError(f"Failed to list preferences: {e}") from e

        ids = list(result.get("ids") or [])
        metadatas = _column(result, "metadatas", len(ids))
        embeddings = _column(result, "embeddings", len(ids))
        documents = _column(result, "documents", len(ids))

        population = [
            _to_stored(user_id, metadata, embedding, document)
            for user_id, metadata, embedding, document in zip(ids, metadatas, embeddings, documents)
        ]
        return [entry for entry in population if entry.has_embedding()]
