"""Product RPC handlers."""

from src.products_ms.api.rpc.router import MessageRouter
from src.products_ms.core.models import PaginationRequest, ProductEnvelope, ProductPage
from src.products_ms.core.services.product import ProductCatalogService
from src.products_ms.entities.service.product import (
    CreateProduct,
    FindProduct,
    Product,
    UpdateProduct,
    ValidateProducts,
)

router = MessageRouter()


@router.message_pattern("create_product", CreateProduct)
def create_product(command: CreateProduct, catalog: ProductCatalogService) -> ProductEnvelope:
    """Create a new product."""
    return catalog.create(command)


@router.message_pattern("find_all_products", PaginationRequest)
def find_all_products(command: PaginationRequest, catalog: ProductCatalogService) -> ProductPage:
    """List available products, one page at a time."""
    return catalog.list_products(command)


@router.message_pattern("find_one_product", FindProduct)
def find_one_product(command: FindProduct, catalog: ProductCatalogService) -> ProductEnvelope:
    """Get an available product by ID."""
    return catalog.get(command.id)


@router.message_pattern("update_product", UpdateProduct)
def update_product(command: UpdateProduct, catalog: ProductCatalogService) -> ProductEnvelope:
    """Update a product."""
    return catalog.update(command.id, command)


@router.message_pattern("delete_product", FindProduct)
def delete_product(command: FindProduct, catalog: ProductCatalogService) -> ProductEnvelope:
    """Soft-delete a product."""
    return catalog.remove(command.id)


@router.message_pattern("validate_products", ValidateProducts)
def validate_products(command: ValidateProducts, catalog: ProductCatalogService) -> list[Product]:
    """Confirm that every id exists, deleted or not."""
    return catalog.validate_existence(command.ids)
