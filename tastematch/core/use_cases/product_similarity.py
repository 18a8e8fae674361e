# Product Similarity Use Cases
"""
Use cases for embedding a catalog product and finding users whose
preferences match it.

Both return an Outcome: success with a value, empty when the product does
not exist, or failure when a collaborator failed.
"""
from typing import Optional

from tastematch.core.matching.match_evaluator import MatchEvaluator
from tastematch.core.synthesis.descriptor_synthesizer import synthesize_product_text
from tastematch.domain.entities.match_result import MatchReport, ProductEmbedding
from tastematch.domain.entities.outcome import Outcome
from tastematch.domain.interfaces.catalog_interface import CatalogProviderInterface
from tastematch.domain.interfaces.embedding_interface import EmbeddingServiceInterface
from tastematch.domain.interfaces.repository_interface import PreferenceStoreInterface
from tastematch.utils.exceptions import CollaboratorError, MissingFieldError
from tastematch.utils.logger import get_logger

logger = get_logger(__name__)


class GetProductEmbeddingUseCase:
    """
    Use case for turning a catalog product into an embedding.

    This use case:
    1. Fetches the product by slug from the catalog
    2. Synthesizes the product text
    3. Generates the embedding
    """

    def __init__(
        self,
        catalog: CatalogProviderInterface,
        embedding_service: EmbeddingServiceInterface,
    ):
        self.catalog = catalog
        self.embedding_service = embedding_service

    def execute(self, slug: str) -> Outcome[ProductEmbedding]:
        """
        Get a product's text summary and embedding.

        Args:
            slug: The product slug.

        Returns:
            Outcome carrying a ProductEmbedding, empty if not found.

        Raises:
            MissingFieldError: If the slug is empty.
        """
        if not slug:
            raise MissingFieldError("Product slug is required", field="slug")

        lookup = self.catalog.get_product_by_slug(slug)
        if not lookup.is_success:
            return Outcome(status=lookup.status, error=lookup.error, reason=lookup.reason)

        product = lookup.value

        text_summary = synthesize_product_text(product)
        logger.debug(f"Product text: {text_summary}")

        try:
            embedding = self.embedding_service.embed(text_summary)
        except CollaboratorError as e:
            logger.error(f"Error getting product embedding for {slug}: {e}")
            return Outcome.failure(e)

        logger.info(f"Generated embedding with {len(embedding)} dimensions for '{slug}'")
        return Outcome.success(
            ProductEmbedding(product=product, text_summary=text_summary, embedding=embedding)
        )


class FindSimilarUsersUseCase:
    """
    Use case for finding users to notify about a product.

    This use case:
    1. Embeds the product (see GetProductEmbeddingUseCase)
    2. Loads every stored preference with an embedding
    3. Ranks matching users with the MatchEvaluator
    """

    def __init__(
        self,
        catalog: CatalogProviderInterface,
        embedding_service: EmbeddingServiceInterface,
        store: PreferenceStoreInterface,
        evaluator: MatchEvaluator,
    ):
        self.product_embedding = GetProductEmbeddingUseCase(catalog, embedding_service)
        self.store = store
        self.evaluator = evaluator

    def execute(self, slug: str, threshold: Optional[float] = None) -> Outcome[MatchReport]:
        """
        Find users whose preferences match a product.

        Args:
            slug: The product slug.
            threshold: Minimum similarity (defaults to the evaluator's).

        Returns:
            Outcome carrying a MatchReport, empty if the product is unknown.

        Raises:
            ValidationError: For a missing slug, an invalid threshold or
                             mismatched embedding dimensions.
        """
        lookup = self.product_embedding.execute(slug)
        if not lookup.is_success:
            return Outcome(status=lookup.status, error=lookup.error, reason=lookup.reason)

        product_embedding = lookup.value

        try:
            population = self.store.list_preferences_with_embedding()
        except CollaboratorError as e:
            logger.error(f"Error loading user preferences: {e}")
            return Outcome.failure(e)

        evaluation = self.evaluator.evaluate(
            product_embedding.embedding,
            product_embedding.product,
            population,
            threshold=threshold,
        )

        return Outcome.success(
            MatchReport(
                product=product_embedding.product,
                matches=evaluation.matches,
                threshold=self.evaluator.threshold if threshold is None else float(threshold),
            )
        )
