"""Product database table model."""

from sqlmodel import Field

from src.products_ms.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "product"

    name: str
    price: float = Field(ge=0)
    description: str | None = None
    available: bool = Field(default=True, index=True)
