"""
StoredPreference entity: one user's preference record as held by the store.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .preference_record import PreferenceRecord


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StoredPreference:
    """
    A persisted preference record with its embedding.

    ``id``, ``created_at`` and ``updated_at`` are assigned by the store.
    ``embedding`` is None until a preference embedding has been generated.
    """

    user_id: str
    preferences: PreferenceRecord
    embedding: Optional[List[float]] = None
    text_summary: str = ""
    id: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def has_embedding(self) -> bool:
        """Check if an embedding has been stored for this user."""
        return self.embedding is not None and len(self.embedding) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "preferences": self.preferences.to_dict(),
            "embedding": list(self.embedding) if self.embedding is not None else None,
            "textSummary": self.text_summary,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
