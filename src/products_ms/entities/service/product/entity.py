"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.products_ms.entities.core._base import Entity


class Product(Entity):
    """Product entity representing a catalog item.

    This is the domain model returned to callers. Rows with ``available``
    set to ``False`` have been soft-deleted.
    """

    name: str = Field(description="Name")
    price: float = Field(ge=0, description="Unit price")
    description: str | None = Field(default=None, description="Free-form description")
    available: bool = Field(default=True, description="False once soft-deleted")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.description == other.description
            and self.available == other.available
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.price,
            self.description,
            self.available,
        ))
