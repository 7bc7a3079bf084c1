"""Product catalog service and its store capability."""

from .catalog_service import ProductCatalogService
from .store import ACTIVE, ProductFilter, ProductStore

__all__ = ["ACTIVE", "ProductCatalogService", "ProductFilter", "ProductStore"]
