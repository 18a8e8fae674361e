"""HTTP client for the product catalog API.

Fetches ``GET {base_url}/products/{slug}`` and maps the payload into a
ProductDescriptor. An unknown slug is an empty outcome; transport errors,
non-404 error statuses and unreadable payloads are failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote

import requests

from tastematch.domain.entities.outcome import Outcome
from tastematch.domain.entities.product_descriptor import ProductDescriptor
from tastematch.domain.interfaces.catalog_interface import CatalogProviderInterface
from tastematch.utils.exceptions import CatalogError, ValidationError
from tastematch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class HttpCatalogProvider(CatalogProviderInterface):
    """Read-only catalog access over HTTP."""

    base_url: str
    api_key: Optional[str] = None
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def get_product_by_slug(self, slug: str) -> Outcome[ProductDescriptor]:
        """Fetch and map one product."""
        if not slug:
            return Outcome.failure(CatalogError("Product slug is required"))

        url = f"{self.base_url}/products/{quote(slug, safe='')}"
        logger.info(f"Fetching product: {slug}")

        try:
            response = self.session.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching product details for {slug}: {e}")
            return Outcome.failure(CatalogError(f"Catalog request failed: {e}", slug=slug))

        if response.status_code == 404:
            logger.info(f"Product not found: {slug}")
            return Outcome.empty("Product not found")

        try:
            response.raise_for_status()
            payload = response.json()
        except (requests.HTTPError, ValueError) as e:
            logger.error(f"Catalog returned an unusable response for {slug}: {e}")
            return Outcome.failure(
                CatalogError(f"Catalog returned an unusable response: {e}", slug=slug, status_code=response.status_code)
            )

        if not payload:
            return Outcome.empty("Product not found")

        try:
            product = ProductDescriptor.from_catalog_payload(payload, slug=slug)
        except ValidationError as e:
            logger.error(f"Catalog payload for {slug} is malformed: {e}")
            return Outcome.failure(e)

        logger.debug(f"Product details fetched: {product.name}")
        return Outcome.success(product)
