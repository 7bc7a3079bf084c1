"""Inbound command payloads for product operations.

These models are the input-shape gate of the service: the dispatch layer
validates every message against one of them before the catalog service sees
it. Unknown fields are rejected.
"""

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_PRICE_DECIMALS = 4


def _check_price_precision(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("price must be a finite number")
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    if -exponent > MAX_PRICE_DECIMALS:
        raise ValueError(f"price must have at most {MAX_PRICE_DECIMALS} decimal places")
    return value


class CreateProduct(BaseModel):
    """Payload for creating a product."""

    model_config = ConfigDict(extra="forbid")

    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    description: str | None = None
    available: bool = True

    @field_validator("price")
    @classmethod
    def price_precision(cls, value: float) -> float:
        return _check_price_precision(value)


class UpdateProduct(BaseModel):
    """Payload for updating a product.

    ``id`` addresses the target row; every other field is optional and only
    the fields actually sent are applied.
    """

    model_config = ConfigDict(extra="forbid")

    id: int = Field(gt=0)
    name: str | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    description: str | None = None
    available: bool | None = None

    @field_validator("name", "price", "available")
    @classmethod
    def not_null(cls, value):
        # Explicit nulls would clear required columns.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("price")
    @classmethod
    def price_precision(cls, value: float) -> float:
        return _check_price_precision(value)

    def changes(self) -> dict:
        """Return the supplied fields, never including the primary key."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class FindProduct(BaseModel):
    """Payload addressing a single product by id."""

    model_config = ConfigDict(extra="forbid")

    id: int


class ValidateProducts(BaseModel):
    """Payload listing product ids whose existence must be confirmed."""

    model_config = ConfigDict(extra="forbid")

    ids: list[int]

    @model_validator(mode="before")
    @classmethod
    def accept_bare_list(cls, data):
        # Callers may send the id array itself as the payload.
        if isinstance(data, list):
            return {"ids": data}
        return data
