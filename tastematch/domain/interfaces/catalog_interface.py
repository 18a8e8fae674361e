"""
Abstract interface for the product catalog.
"""

from abc import ABC, abstractmethod

from tastematch.domain.entities.outcome import Outcome
from tastematch.domain.entities.product_descriptor import ProductDescriptor


class CatalogProviderInterface(ABC):
    """
    Abstract base class for read-only catalog access.
    """

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> Outcome[ProductDescriptor]:
        """
        Fetch one product.

        Args:
            slug: The product slug.

        Returns:
            ``Outcome.success(descriptor)`` when found, ``Outcome.empty()``
            when the catalog has no such product, ``Outcome.failure(error)``
            when the catalog could not be queried.
        """
        pass
