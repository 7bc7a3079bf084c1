"""Persistence capability required by the catalog service."""

from typing import Any, Protocol

from src.products_ms.entities.service.product.entity import Product
from src.products_ms.entities.service.product.filter import ACTIVE, ProductFilter

__all__ = ["ACTIVE", "ProductFilter", "ProductStore"]


class ProductStore(Protocol):
    """The five query primitives the catalog service relies on."""

    def count(self, where: ProductFilter) -> int:
        """Count rows matching the filter."""
        ...

    def find_many(
        self, where: ProductFilter, skip: int = 0, take: int | None = None
    ) -> list[Product]:
        """Return matching rows ordered by id."""
        ...

    def find_unique(self, product_id: int, where: ProductFilter) -> Product | None:
        """Return the row with this id if it also matches the filter."""
        ...

    def create(self, data: dict[str, Any]) -> Product:
        """Insert a row and return it with its assigned id."""
        ...

    def update(self, product_id: int, data: dict[str, Any]) -> Product:
        """Apply the given column values to the row and return it."""
        ...
