"""Response envelopes returned by the catalog operations.

Every envelope has the ``{meta, data, links}`` shape and is serialised with
camelCase keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from src.products_ms.entities.service.product.entity import Product


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResourceMeta(CamelModel):
    """Outcome flags of a single-resource operation; only set flags are emitted."""

    is_created: bool | None = None
    is_found: bool | None = None
    is_updated: bool | None = None
    is_deleted: bool | None = None

    @model_serializer(mode="wrap")
    def _drop_unset_flags(self, handler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class PageMeta(CamelModel):
    """Offset pagination counters."""

    total_items: int
    item_count: int
    items_per_page: int
    total_pages: int
    current_page: int


class ResourceLinks(CamelModel):
    self_: str = Field(alias="self")
    create: str
    update: str
    delete: str


class PageLinks(CamelModel):
    self_: str = Field(alias="self")
    next: str
    previous: str | None
    first: str
    last: str


class ProductEnvelope(BaseModel):
    meta: ResourceMeta
    data: Product
    links: ResourceLinks

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProductPage(BaseModel):
    meta: PageMeta
    data: list[Product]
    links: PageLinks

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def resource_links(base_path: str, product_id: int) -> ResourceLinks:
    resource = f"{base_path}/{product_id}"
    return ResourceLinks(self_=resource, create=base_path, update=resource, delete=resource)


def page_links(base_path: str, page: int, limit: int, total_pages: int) -> PageLinks:
    """Build listing links; ``next`` is always ``page + 1``, even past the last page."""

    def at(number: int) -> str:
        return f"{base_path}?page={number}&limit={limit}"

    return PageLinks(
        self_=at(page),
        next=at(page + 1),
        previous=at(page - 1) if page > 1 else None,
        first=at(1),
        last=at(total_pages),
    )
