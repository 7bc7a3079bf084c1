"""Runs routed handlers against a per-message database session."""

import asyncio
from typing import Any

from pydantic import BaseModel

from src.products_ms.api.rpc.router import MessageRouter, Route, validate_command
from src.products_ms.core.models import ProductEnvelope, ProductPage
from src.products_ms.core.services import DbSessionService, ProductCatalogService
from src.products_ms.entities.service.product import ProductRepository


def serialize_result(result: Any) -> Any:
    """Convert handler results into JSON-compatible reply payloads."""
    if isinstance(result, (ProductEnvelope, ProductPage)):
        return result.to_payload()
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [serialize_result(item) for item in result]
    return result


class MessageDispatcher:
    """Validates a payload, opens a session scope and invokes the handler.

    Database work is synchronous; ``dispatch`` moves it to a worker thread
    so the transport loop keeps serving other messages.
    """

    def __init__(
        self,
        router: MessageRouter,
        database_service: DbSessionService,
        base_path: str = "/products",
    ) -> None:
        self._router = router
        self._database_service = database_service
        self._base_path = base_path

    @property
    def router(self) -> MessageRouter:
        return self._router

    def handle(self, route: Route, data: Any) -> Any:
        command = validate_command(route.command, data)
        with self._database_service.session_scope() as session:
            catalog = ProductCatalogService(ProductRepository(session), self._base_path)
            result = route.handler(command, catalog)
        return serialize_result(result)

    async def dispatch(self, pattern: Any, data: Any) -> Any:
        route = self._router.resolve(pattern)
        return await asyncio.to_thread(self.handle, route, data)
