"""Catalog operations over the product store."""

import math

from loguru import logger

from src.products_ms.core.exceptions import ProductNotFoundError, ProductsNotFoundError
from src.products_ms.core.models.envelope import (
    PageMeta,
    ProductEnvelope,
    ProductPage,
    ResourceMeta,
    page_links,
    resource_links,
)
from src.products_ms.core.models.pagination import PaginationRequest
from src.products_ms.core.services.product.store import ACTIVE, ProductFilter, ProductStore
from src.products_ms.entities.service.product.commands import CreateProduct, UpdateProduct
from src.products_ms.entities.service.product.entity import Product


class ProductCatalogService:
    """Mediates reads and writes against the product store.

    Only products with ``available=True`` are visible to ``get``, ``update``
    and ``remove``. Deletion is a one-way flag flip; rows are never removed.
    ``validate_existence`` is the exception: it checks existence regardless
    of the flag and returns bare products instead of an envelope.
    """

    def __init__(self, store: ProductStore, base_path: str = "/products") -> None:
        self._store = store
        self._base_path = base_path

    def create(self, command: CreateProduct) -> ProductEnvelope:
        product = self._store.create(command.model_dump())
        logger.info("Created product {}", product.id)
        return ProductEnvelope(
            meta=ResourceMeta(is_created=True),
            data=product,
            links=resource_links(self._base_path, product.id),
        )

    def list_products(self, pagination: PaginationRequest) -> ProductPage:
        page, limit = pagination.page, pagination.limit
        total_items = self._store.count(ACTIVE)
        products = self._store.find_many(ACTIVE, skip=pagination.skip, take=limit)
        total_pages = math.ceil(total_items / limit)

        return ProductPage(
            meta=PageMeta(
                total_items=total_items,
                item_count=len(products),
                items_per_page=limit,
                total_pages=total_pages,
                current_page=page,
            ),
            data=products,
            links=page_links(self._base_path, page, limit, total_pages),
        )

    def _get_active(self, product_id: int) -> Product:
        product = self._store.find_unique(product_id, ACTIVE)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def get(self, product_id: int) -> ProductEnvelope:
        product = self._get_active(product_id)
        return ProductEnvelope(
            meta=ResourceMeta(is_found=True),
            data=product,
            links=resource_links(self._base_path, product_id),
        )

    def update(self, product_id: int, command: UpdateProduct) -> ProductEnvelope:
        """Apply the supplied fields to an active product.

        The target is always ``product_id``; an ``id`` carried by the
        command is never written.
        """
        self._get_active(product_id)
        product = self._store.update(product_id, command.changes())
        logger.info("Updated product {}", product_id)
        return ProductEnvelope(
            meta=ResourceMeta(is_updated=True),
            data=product,
            links=resource_links(self._base_path, product_id),
        )

    def remove(self, product_id: int) -> ProductEnvelope:
        self._get_active(product_id)
        product = self._store.update(product_id, {"available": False})
        logger.info("Soft-deleted product {}", product_id)
        return ProductEnvelope(
            meta=ResourceMeta(is_deleted=True),
            data=product,
            links=resource_links(self._base_path, product_id),
        )

    def validate_existence(self, ids: list[int]) -> list[Product]:
        distinct_ids = list(dict.fromkeys(ids))
        products = self._store.find_many(ProductFilter(ids=distinct_ids))

        if len(products) != len(distinct_ids):
            found = {product.id for product in products}
            missing = [product_id for product_id in distinct_ids if product_id not in found]
            logger.warning("Product validation failed; missing ids {}", missing)
            raise ProductsNotFoundError(missing)

        return products
