# Catalog Infrastructure Package
"""
Catalog provider implementations.
"""

from .http_catalog_provider import HttpCatalogProvider

__all__ = ["HttpCatalogProvider"]
