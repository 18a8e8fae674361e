"""Public surface of the preference-to-product matching engine.

The engine takes its collaborators explicitly; ``build_engine`` wires the
concrete OpenAI, HTTP catalog and ChromaDB implementations from the
application configuration.
"""

import os
from typing import Iterable, List, Optional, Sequence, Union

from tastematch.core.matching.match_evaluator import MatchEvaluator
from tastematch.core.scoring.similarity import VectorLike, cosine_similarity
from tastematch.core.synthesis.descriptor_synthesizer import synthesize_text
from tastematch.core.use_cases.persist_preference import PersistPreferenceUseCase
from tastematch.core.use_cases.product_similarity import (
    FindSimilarUsersUseCase,
    GetProductEmbeddingUseCase,
)
from tastematch.domain.entities.match_result import MatchEvaluation, MatchReport, ProductEmbedding
from tastematch.domain.entities.outcome import Outcome
from tastematch.domain.entities.preference_record import PreferenceRecord
from tastematch.domain.entities.product_descriptor import ProductDescriptor
from tastematch.domain.entities.stored_preference import StoredPreference
from tastematch.domain.interfaces.catalog_interface import CatalogProviderInterface
from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.domain.interfaces.repository_interface import PreferenceStoreInterface
from tastematch.utils.config import AppConfig, get_config
from tastematch.utils.exceptions import ConfigError, ConfigValidationError
from tastematch.utils.logger import apply_log_level, get_logger

logger = get_logger(__name__)


class MatchingEngine:
    """Facade over text synthesis, embedding, scoring, matching and persistence."""

    def __init__(
        self,
        embedding_service: EmbeddingServiceInterface,
        store: Optional[PreferenceStoreInterface] = None,
        catalog: Optional[CatalogProviderInterface] = None,
        evaluator: Optional[MatchEvaluator] = None,
    ):
        """Initialize the engine.

        Args:
            embedding_service: Text embedding service
            store: Preference store (needed for persistence and find_similar_users)
            catalog: Catalog provider (needed for product lookups by slug)
            evaluator: Match evaluator (defaults to threshold 0.7)
        """
        self.embedding_service = embedding_service
        self.store = store
        self.catalog = catalog
        self.evaluator = evaluator or MatchEvaluator()

    def _require_store(self) -> PreferenceStoreInterface:
        if self.store is None:
            raise ConfigError("No preference store configured")
        return self.store

    def _require_catalog(self) -> CatalogProviderInterface:
        if self.catalog is None:
            raise ConfigError("No catalog provider configured")
        return self.catalog

    def synthesize_text(self, subject: Union[PreferenceRecord, ProductDescriptor]) -> str:
        """Canonical text of a preference record or product."""
        return synthesize_text(subject)

    def embed(self, text: str) -> List[float]:
        """Embedding of a text."""
        return self.embedding_service.embed(text)

    def score(self, vec_a: VectorLike, vec_b: VectorLike) -> float:
        """Cosine similarity of two equal-length vectors."""
        return cosine_similarity(vec_a, vec_b)

    def evaluate_matches(
        self,
        product_vector: Sequence[float],
        product: ProductDescriptor,
        population: Optional[Iterable[StoredPreference]],
        threshold: Optional[float] = None,
    ) -> MatchEvaluation:
        """Ranked matches of a product vector against a user population."""
        return self.evaluator.evaluate(product_vector, product, population, threshold=threshold)

    def persist_preference(self, user_id: str, preferences: PreferenceRecord) -> StoredPreference:
        """Create or replace a user's preference record and embedding."""
        use_case = PersistPreferenceUseCase(self.embedding_service, self._require_store())
        return use_case.execute(user_id, preferences)

    def get_product_embedding(self, slug: str) -> Outcome[ProductEmbedding]:
        """Text summary and embedding of a catalog product."""
        use_case = GetProductEmbeddingUseCase(self._require_catalog(), self.embedding_service)
        return use_case.execute(slug)

    def find_similar_users(self, slug: str, threshold: Optional[float] = None) -> Outcome[MatchReport]:
        """Users whose stored preferences match a catalog product."""
        use_case = FindSimilarUsersUseCase(
            self._require_catalog(),
            self.embedding_service,
            self._require_store(),
            self.evaluator,
        )
        return use_case.execute(slug, threshold=threshold)


def build_engine(config: Optional[AppConfig] = None) -> MatchingEngine:
    """Create a MatchingEngine wired with the configured collaborators.

    Args:
        config: Application config (defaults to get_config())

    Returns:
        Engine using OpenAI embeddings, the HTTP catalog and ChromaDB

    Raises:
        ConfigValidationError: If the embedding API key is not set
    """
    # Imported here so the core stays importable without the client libraries
    from tastematch.infrastructure.catalog import HttpCatalogProvider
    from tastematch.infrastructure.database import ChromaPreferenceStore
    from tastematch.infrastructure.embedding import CachedEmbeddingService, OpenAIEmbeddingService

    config = config or get_config()
    apply_log_level(config.log_level)

    api_key = os.environ.get(config.embedding.api_key_env)
    if not api_key:
        raise ConfigValidationError(
            f"Environment variable {config.embedding.api_key_env} is not set",
            field="embedding.api_key_env",
        )

    embedding_service: EmbeddingServiceInterface = OpenAIEmbeddingService(
        api_key=api_key,
        model=config.embedding.model,
        timeout=config.embedding.timeout_seconds,
    )
    if config.embedding.cache_enabled:
        embedding_service = CachedEmbeddingService(embedding_service)

    catalog_key = os.environ.get(config.catalog.api_key_env) if config.catalog.api_key_env else None

    engine = MatchingEngine(
        embedding_service=embedding_service,
        store=ChromaPreferenceStore(
            persist_directory=config.database.persist_directory,
            collection_name=config.database.collection_name,
        ),
        catalog=HttpCatalogProvider(
            base_url=config.catalog.base_url,
            api_key=catalog_key,
            timeout=config.catalog.timeout_seconds,
        ),
        evaluator=MatchEvaluator(threshold=config.matching.threshold),
    )

    logger.info(
        f"Matching engine ready (model={config.embedding.model}, "
        f"threshold={config.matching.threshold:.2f}, cache={config.embedding.cache_enabled})"
    )
    return engine
