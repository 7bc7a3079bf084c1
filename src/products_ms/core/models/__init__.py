"""Request and response models shared by the RPC layer."""

from .envelope import (
    PageLinks,
    PageMeta,
    ProductEnvelope,
    ProductPage,
    ResourceLinks,
    ResourceMeta,
    page_links,
    resource_links,
)
from .pagination import PaginationRequest

__all__ = [
    "PageLinks",
    "PageMeta",
    "PaginationRequest",
    "ProductEnvelope",
    "ProductPage",
    "ResourceLinks",
    "ResourceMeta",
    "page_links",
    "resource_links",
]
