"""Message-pattern routing for the RPC transport."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from src.products_ms.core.exceptions import InvalidCommandError, UnknownPatternError
from src.products_ms.core.services.product import ProductCatalogService

Handler = Callable[[Any, ProductCatalogService], Any]


def pattern_key(pattern: Any) -> str:
    """Normalise a message pattern to the string used for lookup and channels."""
    if isinstance(pattern, str):
        return pattern
    return json.dumps(pattern, separators=(",", ":"), sort_keys=True)


def validate_command(model: type[BaseModel], data: Any) -> BaseModel:
    """Validate an inbound payload, turning pydantic errors into InvalidCommandError."""
    try:
        return model.model_validate({} if data is None else data)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise InvalidCommandError(errors) from exc


@dataclass(frozen=True)
class Route:
    pattern: dict[str, str]
    command: type[BaseModel]
    handler: Handler

    @property
    def key(self) -> str:
        return pattern_key(self.pattern)


class MessageRouter:
    """Registry of handlers addressed by ``{"cmd": <name>}`` patterns."""

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}

    def message_pattern(self, cmd: str, command: type[BaseModel]) -> Callable[[Handler], Handler]:
        """Register the decorated function for ``{"cmd": cmd}`` payloads of type ``command``."""

        def decorator(handler: Handler) -> Handler:
            route = Route(pattern={"cmd": cmd}, command=command, handler=handler)
            if route.key in self._routes:
                raise ValueError(f"Duplicate handler for pattern {route.key}")
            self._routes[route.key] = route
            return handler

        return decorator

    def include_router(self, other: "MessageRouter") -> None:
        for route in other.routes:
            if route.key in self._routes:
                raise ValueError(f"Duplicate handler for pattern {route.key}")
            self._routes[route.key] = route

    @property
    def routes(self) -> list[Route]:
        return list(self._routes.values())

    def resolve(self, pattern: Any) -> Route:
        key = pattern_key(pattern)
        route = self._routes.get(key)
        if route is None:
            raise UnknownPatternError(key)
        return route
