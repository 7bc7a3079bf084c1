"""Core services exports."""

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Product Services
from .product import ProductCatalogService, ProductStore

# Transport Services
from .redis_service import RedisService

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    # Product Services
    "ProductCatalogService",
    "ProductStore",
    # Transport Services
    "RedisService",
]
