"""Domain failures raised by the products microservice.

Every failure carries an HTTP-style ``status`` used as a transport status
hint. The RPC layer turns them into error replies with ``to_payload``.
"""

from http import HTTPStatus
from typing import Any


class ProductServiceError(Exception):
    """Base class for failures reported back to the calling service."""

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_payload(self) -> dict[str, Any]:
        return {"status": int(self.status), "message": self.message}


class ProductNotFoundError(ProductServiceError):
    """The product does not exist or has been soft-deleted."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class ProductsNotFoundError(ProductServiceError):
    """One or more ids in a batch do not exist at all."""

    status = HTTPStatus.BAD_GATEWAY

    def __init__(self, missing_ids: list[int]) -> None:
        super().__init__("Some products were not found")
        self.missing_ids = missing_ids

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["missingIds"] = self.missing_ids
        return payload


class InvalidCommandError(ProductServiceError):
    """An inbound payload failed input validation."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Invalid payload: " + "; ".join(errors))
        self.errors = errors

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["errors"] = self.errors
        return payload


class UnknownPatternError(ProductServiceError):
    """No handler is registered for a message pattern."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, pattern: Any) -> None:
        super().__init__(f"There is no matching message handler defined for pattern {pattern}")
        self.pattern = pattern
