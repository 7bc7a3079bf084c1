"""Entity package: Product."""

from .commands import CreateProduct, FindProduct, UpdateProduct, ValidateProducts
from .entity import Product
from .filter import ACTIVE, ProductFilter
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "ACTIVE",
    "CreateProduct",
    "FindProduct",
    "Product",
    "ProductFilter",
    "ProductRepository",
    "ProductTable",
    "UpdateProduct",
    "ValidateProducts",
]
