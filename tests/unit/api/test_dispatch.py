"""Unit tests for message routing and dispatch."""

import json

import pytest
from pydantic import BaseModel

from src.products_ms.api.rpc.app import create_router
from src.products_ms.api.rpc.dispatcher import serialize_result
from src.products_ms.api.rpc.router import MessageRouter, pattern_key, validate_command
from src.products_ms.core.exceptions import (
    InvalidCommandError,
    ProductNotFoundError,
    ProductsNotFoundError,
    UnknownPatternError,
)
from src.products_ms.entities.service.product import (
    CreateProduct,
    Product,
    ProductFilter,
    ProductRepository,
)


class Ping(BaseModel):
    value: int = 0


class TestMessageRouter:
    """Test handler registration and lookup."""

    def test_pattern_key_is_compact_sorted_json(self):
        assert pattern_key({"cmd": "find_one_product"}) == '{"cmd":"find_one_product"}'
        assert pattern_key({"b": 1, "a": 2}) == '{"a":2,"b":1}'
        assert pattern_key('{"cmd":"x"}') == '{"cmd":"x"}'

    def test_resolve_registered_pattern(self):
        router = MessageRouter()

        @router.message_pattern("ping", Ping)
        def ping(command, catalog):
            return command.value

        route = router.resolve({"cmd": "ping"})

        assert route.handler is ping
        assert route.command is Ping

    def test_resolve_unknown_pattern(self):
        with pytest.raises(UnknownPatternError) as exc_info:
            MessageRouter().resolve({"cmd": "missing"})

        assert exc_info.value.status == 404

    def test_duplicate_pattern_rejected(self):
        router = MessageRouter()
        router.message_pattern("ping", Ping)(lambda command, catalog: None)

        with pytest.raises(ValueError, match="Duplicate"):
            router.message_pattern("ping", Ping)(lambda command, catalog: None)

    def test_product_routes_registered(self):
        keys = {route.pattern["cmd"] for route in create_router().routes}

        assert keys == {
            "create_product",
            "find_all_products",
            "find_one_product",
            "update_product",
            "delete_product",
            "validate_products",
        }

    def test_validate_command_reports_fields(self):
        with pytest.raises(InvalidCommandError) as exc_info:
            validate_command(CreateProduct, {"price": -1})

        error = exc_info.value
        assert error.status == 400
        assert any(message.startswith("name:") for message in error.errors)
        assert any(message.startswith("price:") for message in error.errors)
        assert error.to_payload()["errors"] == error.errors

    def test_validate_command_treats_none_as_empty(self):
        assert validate_command(Ping, None).value == 0


class TestSerializeResult:
    def test_products_list_serialised_to_dicts(self):
        payload = serialize_result([Product(id=1, name="A", price=1.5)])

        assert payload[0]["id"] == 1
        assert payload[0]["price"] == 1.5
        assert isinstance(payload[0]["createdAt"], str)

    def test_plain_values_pass_through(self):
        assert serialize_result({"ok": True}) == {"ok": True}


@pytest.mark.asyncio
class TestMessageDispatcher:
    """End-to-end dispatch through validation, session scope and the catalog."""

    async def test_create_and_find_one(self, dispatcher):
        created = await dispatcher.dispatch(
            {"cmd": "create_product"}, {"name": "A", "price": 9.99}
        )

        assert created["meta"] == {"isCreated": True}
        product_id = created["data"]["id"]

        found = await dispatcher.dispatch({"cmd": "find_one_product"}, {"id": product_id})

        assert found["meta"] == {"isFound": True}
        assert found["data"]["name"] == "A"
        assert found["data"]["price"] == 9.99

    async def test_find_all_uses_defaults(self, dispatcher):
        for index in range(3):
            await dispatcher.dispatch(
                {"cmd": "create_product"}, {"name": f"P{index}", "price": 1}
            )

        page = await dispatcher.dispatch({"cmd": "find_all_products"}, {})

        assert page["meta"]["totalItems"] == 3
        assert page["meta"]["itemsPerPage"] == 10
        assert page["links"]["previous"] is None
        assert page["links"]["last"] == "/products?page=1&limit=10"

    async def test_update_then_delete(self, dispatcher):
        created = await dispatcher.dispatch(
            {"cmd": "create_product"}, {"name": "A", "price": 1}
        )
        product_id = created["data"]["id"]

        updated = await dispatcher.dispatch(
            {"cmd": "update_product"}, {"id": product_id, "name": "B"}
        )
        deleted = await dispatcher.dispatch({"cmd": "delete_product"}, {"id": product_id})

        assert updated["meta"] == {"isUpdated": True}
        assert updated["data"]["name"] == "B"
        assert deleted["meta"] == {"isDeleted": True}
        assert deleted["data"]["available"] is False

        with pytest.raises(ProductNotFoundError):
            await dispatcher.dispatch({"cmd": "delete_product"}, {"id": product_id})

    async def test_writes_are_committed(self, dispatcher, database_service):
        """Each message runs in its own committed session scope."""
        await dispatcher.dispatch({"cmd": "create_product"}, {"name": "A", "price": 1})

        with database_service.session_scope() as session:
            assert ProductRepository(session).count(ProductFilter()) == 1

    async def test_validate_products_returns_bare_list(self, dispatcher):
        created = await dispatcher.dispatch(
            {"cmd": "create_product"}, {"name": "A", "price": 1}
        )
        product_id = created["data"]["id"]

        products = await dispatcher.dispatch({"cmd": "validate_products"}, [product_id])

        assert isinstance(products, list)
        assert products[0]["id"] == product_id

    async def test_validate_products_mismatch(self, dispatcher):
        with pytest.raises(ProductsNotFoundError) as exc_info:
            await dispatcher.dispatch({"cmd": "validate_products"}, {"ids": [1, 1, 2]})

        assert exc_info.value.missing_ids == [1, 2]

    async def test_invalid_payload_rejected_before_service(self, dispatcher):
        with pytest.raises(InvalidCommandError):
            await dispatcher.dispatch(
                {"cmd": "create_product"}, {"name": "A", "price": 1, "extra": True}
            )

    @pytest.mark.parametrize(
        ("cmd", "raw"),
        [
            ("create_product", '{"name": "A", "price": Infinity}'),
            ("create_product", '{"name": "A", "price": NaN}'),
            ("update_product", '{"id": 1, "price": Infinity}'),
        ],
    )
    async def test_non_finite_price_rejected(self, dispatcher, cmd, raw):
        with pytest.raises(InvalidCommandError):
            await dispatcher.dispatch({"cmd": cmd}, json.loads(raw))

        page = await dispatcher.dispatch({"cmd": "find_all_products"}, {})
        assert page["meta"]["totalItems"] == 0

    async def test_unknown_pattern(self, dispatcher):
        with pytest.raises(UnknownPatternError):
            await dispatcher.dispatch({"cmd": "nope"}, {})
