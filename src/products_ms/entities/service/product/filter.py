"""Row filter shared by the product store query primitives."""

from collections.abc import Collection
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductFilter:
    """``None`` means "do not filter on this column"."""

    available: bool | None = None
    ids: Collection[int] | None = None


ACTIVE = ProductFilter(available=True)
