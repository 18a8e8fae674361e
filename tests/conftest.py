"""Pytest fixtures and configuration for TasteMatch tests."""

import hashlib
import os
import tempfile
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

# Keep test logs out of the project tree; must be set before tastematch is imported
os.environ.setdefault("TASTEMATCH_LOG_DIR", tempfile.mkdtemp(prefix="tastematch-logs-"))

import numpy as np
import pytest

from tastematch.domain.entities.outcome import Outcome
from tastematch.domain.entities.preference_record import (
    InteractionType,
    PreferenceRecord,
    PriceRange,
    ProductInteraction,
)
from tastematch.domain.entities.product_descriptor import ProductDescriptor
from tastematch.domain.entities.stored_preference import StoredPreference
from tastematch.domain.interfaces.catalog_interface import CatalogProviderInterface
from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.domain.interfaces.repository_interface import PreferenceStoreInterface
from tastematch.utils.config import (
    AppConfig,
    CatalogConfig,
    DatabaseConfig,
    EmbeddingConfig,
    MatchingConfig,
    reset_config,
)
from tastematch.utils.exceptions import CatalogError, EmbeddingGenerationError, PreferenceStoreError


FAKE_DIMENSIONS = 8


class FakeEmbeddingService(EmbeddingServiceInterface):
    """Deterministic embeddings: registered vectors first, else seeded from the text hash."""

    def __init__(self, vectors: Optional[Dict[str, Sequence[float]]] = None, model: str = "fake-embedding"):
        self.vectors = dict(vectors or {})
        self.calls: List[str] = []
        self.fail = False
        self._model = model

    @property
    def model_name(self) -> str:
        return self._model

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.fail:
            raise EmbeddingGenerationError(context={"model": self._model, "cause": "fake outage"})
        if text in self.vectors:
            return list(self.vectors[text])
        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
        rng = np.random.default_rng(seed)
        return rng.standard_normal(FAKE_DIMENSIONS).tolist()


class FakeCatalogProvider(CatalogProviderInterface):
    """In-memory catalog; slugs listed in ``failing`` answer with a failure."""

    def __init__(self, products: Optional[Sequence[ProductDescriptor]] = None):
        self.products = {p.slug: p for p in products or ()}
        self.failing: set = set()

    def get_product_by_slug(self, slug: str) -> Outcome[ProductDescriptor]:
        if slug in self.failing:
            return Outcome.failure(CatalogError("Catalog unavailable", slug=slug))
        product = self.products.get(slug)
        if product is None:
            return Outcome.empty("Product not found")
        return Outcome.success(product)


class FakePreferenceStore(PreferenceStoreInterface):
    """Dict-backed preference store assigning ids and timestamps like the real one."""

    def __init__(self):
        self.records: Dict[str, StoredPreference] = {}
        self.writes = 0
        self.fail_reads = False
        self.reads = 0

    def get_preference(self, user_id: str) -> Optional[StoredPreference]:
        self.reads += 1
        if self.fail_reads:
            raise PreferenceStoreError("Store offline", user_id=user_id)
        return self.records.get(user_id)

    def insert_preference(self, user_id, preferences, embedding, text_summary) -> StoredPreference:
        now = datetime.now(timezone.utc)
        stored = StoredPreference(
            id=uuid.uuid4().hex,
            user_id=user_id,
            preferences=preferences,
            embedding=list(embedding),
            text_summary=text_summary,
            created_at=now,
            updated_at=now,
        )
        self.records[user_id] = stored
        self.writes += 1
        return stored

    def update_preference(self, existing, preferences, embedding, text_summary) -> StoredPreference:
        stored = StoredPreference(
            id=existing.id,
            user_id=existing.user_id,
            preferences=preferences,
            embedding=list(embedding),
            text_summary=text_summary,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        self.records[existing.user_id] = stored
        self.writes += 1
        return stored

    def list_preferences_with_embedding(self) -> List[StoredPreference]:
        if self.fail_reads:
            raise PreferenceStoreError("Store offline")
        return [r for r in self.records.values() if r.has_embedding()]


@pytest.fixture
def test_config() -> AppConfig:
    """Provide test-specific configuration with in-memory ChromaDB."""
    return AppConfig(
        embedding=EmbeddingConfig(
            model="text-embedding-3-small",
            api_key_env="TASTEMATCH_TEST_OPENAI_KEY",
            timeout_seconds=5,
            cache_enabled=False,
        ),
        catalog=CatalogConfig(base_url="http://catalog.test/api/", timeout_seconds=2),
        database=DatabaseConfig(
            persist_directory=":memory:",
            collection_name=f"test_preferences_{uuid.uuid4().hex[:8]}",
        ),
        matching=MatchingConfig(threshold=0.7),
        log_level="DEBUG",
    )


@pytest.fixture
def fake_embedding_service() -> FakeEmbeddingService:
    return FakeEmbeddingService()


@pytest.fixture
def fake_store() -> FakePreferenceStore:
    return FakePreferenceStore()


@pytest.fixture
def red_dress() -> ProductDescriptor:
    """A fully populated catalog product."""
    return ProductDescriptor(
        slug="red-dress",
        name="Red Dress",
        brand="Zara",
        category="Dresses",
        department="Women",
        price=1299,
        discount=20,
        currency="₹",
        description="Flowy midi dress",
        sizes=("S", "M"),
    )


@pytest.fixture
def fake_catalog(red_dress) -> FakeCatalogProvider:
    return FakeCatalogProvider([red_dress])


@pytest.fixture
def sample_price_range() -> PriceRange:
    return PriceRange(min=500, max=3000, currency="INR")


@pytest.fixture
def liked_interactions() -> List[ProductInteraction]:
    """Three likes: two Zara products and one Levis product."""
    return [
        ProductInteraction(
            slug="red-dress", name="Red Dress", brand="Zara", category="Dresses",
            price=1000, marked_price=1250, discount=20,
            interaction_type=InteractionType.LIKE, swipe_order=1,
        ),
        ProductInteraction(
            slug="blue-top", name="Blue Top", brand="Zara", category="Tops",
            price=500, marked_price=550, discount=10,
            interaction_type=InteractionType.LIKE, swipe_order=2,
        ),
        ProductInteraction(
            slug="black-jeans", name="Black Jeans", brand="Levis", category="Jeans",
            price=1500, marked_price=1500, discount=0,
            interaction_type=InteractionType.LIKE, swipe_order=4,
        ),
    ]


@pytest.fixture
def disliked_interactions() -> List[ProductInteraction]:
    return [
        ProductInteraction(
            slug="green-skirt", name="Green Skirt", brand="H&M", category="Skirts",
            price=800, marked_price=800, discount=0,
            interaction_type=InteractionType.DISLIKE, swipe_order=3,
        ),
    ]


@pytest.fixture
def simple_record(sample_price_range) -> PreferenceRecord:
    """Preference record without enhanced signals."""
    return PreferenceRecord(
        selected_categories=["Dresses", "Tops"],
        liked_products=["red-dress"],
        disliked_products=["green-skirt"],
        price_range=sample_price_range,
        selected_brands=["Zara"],
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached configuration between tests."""
    reset_config()
    yield
    reset_config()
