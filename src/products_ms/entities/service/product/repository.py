"""Data-access layer for products."""

from typing import Any

from sqlalchemy import func
from sqlmodel import Session, col, select

from src.products_ms.entities.service.product.entity import Product
from src.products_ms.entities.service.product.filter import ProductFilter
from src.products_ms.entities.service.product.table import ProductTable


class ProductRepository:
    """SQLModel implementation of the product store.

    The repository flushes but never commits; the caller owns the
    transaction (see ``DbSessionService.session_scope``).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _apply(self, statement, where: ProductFilter):
        if where.available is not None:
            statement = statement.where(ProductTable.available == where.available)
        if where.ids is not None:
            statement = statement.where(col(ProductTable.id).in_(list(where.ids)))
        return statement

    def count(self, where: ProductFilter) -> int:
        statement = self._apply(select(func.count()).select_from(ProductTable), where)
        return self._session.exec(statement).one()

    def find_many(
        self, where: ProductFilter, skip: int = 0, take: int | None = None
    ) -> list[Product]:
        statement = self._apply(select(ProductTable), where).order_by(col(ProductTable.id))
        if skip:
            statement = statement.offset(skip)
        if take is not None:
            statement = statement.limit(take)
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row) for row in rows]

    def find_unique(self, product_id: int, where: ProductFilter) -> Product | None:
        statement = self._apply(
            select(ProductTable).where(ProductTable.id == product_id), where
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Product.model_validate(row)

    def create(self, data: dict[str, Any]) -> Product:
        row = ProductTable(**data)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row)

    def update(self, product_id: int, data: dict[str, Any]) -> Product:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            raise ValueError(f"Product with ID {product_id} does not exist")
        for field, value in data.items():
            setattr(row, field, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row)
