"""Unit tests for the Redis RPC server and client with an in-process pub/sub."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from src.products_ms.api.rpc.client import RedisRpcClient, RpcError
from src.products_ms.api.rpc.server import RedisRpcServer
from src.products_ms.runtime.config.config_data import TransportConfig

CREATE_CHANNEL = '{"cmd":"create_product"}'


@pytest.fixture
def transport() -> TransportConfig:
    return TransportConfig(request_timeout=0.5)


@pytest.fixture
def server(fake_redis, dispatcher, transport) -> RedisRpcServer:
    return RedisRpcServer(fake_redis, dispatcher, transport)


@pytest.mark.asyncio
class TestRedisRpcServer:
    """Test packet handling and the subscribe loop."""

    async def test_channels_cover_every_route(self, server):
        assert CREATE_CHANNEL in server.channels
        assert '{"cmd":"validate_products"}' in server.channels
        assert len(server.channels) == 6

    async def test_channels_use_prefix(self, fake_redis, dispatcher):
        prefixed = RedisRpcServer(fake_redis, dispatcher, TransportConfig(channel_prefix="products:"))

        assert f"products:{CREATE_CHANNEL}" in prefixed.channels

    async def test_request_gets_response_packet(self, server):
        packet = {"pattern": {"cmd": "create_product"}, "data": {"name": "A", "price": 2}, "id": "req-1"}

        reply = await server.handle_packet(CREATE_CHANNEL, json.dumps(packet))

        assert reply["id"] == "req-1"
        assert reply["isDisposed"] is True
        assert reply["response"]["meta"] == {"isCreated": True}
        assert "err" not in reply

    async def test_domain_error_becomes_err_packet(self, server):
        packet = {"pattern": {"cmd": "find_one_product"}, "data": {"id": 42}, "id": "req-2"}

        reply = await server.handle_packet('{"cmd":"find_one_product"}', json.dumps(packet))

        assert reply["err"] == {"status": 404, "message": "Product with ID 42 not found"}
        assert "response" not in reply

    async def test_validation_error_becomes_bad_request(self, server):
        packet = {"pattern": {"cmd": "create_product"}, "data": {"price": "abc"}, "id": "req-3"}

        reply = await server.handle_packet(CREATE_CHANNEL, json.dumps(packet))

        assert reply["err"]["status"] == 400
        assert reply["err"]["errors"]

    async def test_unexpected_error_is_masked(self, server, dispatcher):
        dispatcher.dispatch = AsyncMock(side_effect=RuntimeError("boom"))
        packet = {"pattern": {"cmd": "create_product"}, "data": {}, "id": "req-4"}

        reply = await server.handle_packet(CREATE_CHANNEL, json.dumps(packet))

        assert reply["err"] == {"status": 500, "message": "Internal server error"}

    async def test_pattern_falls_back_to_channel(self, server):
        packet = {"data": {"name": "A", "price": 1}, "id": "req-5"}

        reply = await server.handle_packet(CREATE_CHANNEL, json.dumps(packet))

        assert reply["response"]["data"]["name"] == "A"

    async def test_event_packet_gets_no_reply(self, server, dispatcher):
        packet = {"pattern": {"cmd": "create_product"}, "data": {"name": "Evt", "price": 1}}

        assert await server.handle_packet(CREATE_CHANNEL, json.dumps(packet)) is None

        page = await dispatcher.dispatch({"cmd": "find_all_products"}, {})
        assert page["meta"]["totalItems"] == 1

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]"])
    async def test_malformed_packets_dropped(self, server, raw):
        assert await server.handle_packet(CREATE_CHANNEL, raw) is None

    async def test_run_publishes_reply_on_reply_channel(self, server, fake_redis, fake_pubsub):
        packet = {"pattern": {"cmd": "create_product"}, "data": {"name": "A", "price": 1}, "id": "r"}
        fake_pubsub.push(CREATE_CHANNEL, packet)
        fake_pubsub.stop()
        ready = asyncio.Event()

        await server.run(ready)

        assert ready.is_set()
        fake_pubsub.subscribe.assert_awaited_once_with(*server.channels)
        fake_pubsub.aclose.assert_awaited_once()
        channel, raw = fake_redis.publish.await_args.args
        assert channel == f"{CREATE_CHANNEL}.reply"
        assert json.loads(raw)["id"] == "r"

    async def test_run_ignores_non_message_events(self, server, fake_redis, fake_pubsub):
        fake_pubsub.queue.put_nowait({"type": "subscribe", "channel": CREATE_CHANNEL, "data": 1})
        fake_pubsub.stop()

        await server.run()

        fake_redis.publish.assert_not_awaited()


@pytest.mark.asyncio
class TestRedisRpcClient:
    """Test request/reply correlation on the client side."""

    async def test_send_returns_response(self, fake_redis, fake_pubsub, reply_with, transport):
        reply_with(lambda packet: {"id": packet["id"], "response": {"ok": packet["data"]}, "isDisposed": True})
        client = RedisRpcClient(fake_redis, transport)

        result = await client.send("find_one_product", {"id": 1})

        assert result == {"ok": {"id": 1}}
        fake_pubsub.subscribe.assert_awaited_once_with('{"cmd":"find_one_product"}.reply')
        fake_pubsub.unsubscribe.assert_awaited_once()

    async def test_send_ignores_other_request_ids(self, fake_redis, fake_pubsub, reply_with, transport):
        def responder(packet):
            fake_pubsub.push('{"cmd":"x"}.reply', {"id": "someone-else", "response": "wrong"})
            return {"id": packet["id"], "response": "right"}

        reply_with(responder)
        client = RedisRpcClient(fake_redis, transport)

        assert await client.send("x") == "right"

    async def test_send_raises_error_reply(self, fake_redis, reply_with, transport):
        reply_with(lambda packet: {"id": packet["id"], "err": {"status": 502, "message": "Some products were not found"}})
        client = RedisRpcClient(fake_redis, transport)

        with pytest.raises(RpcError) as exc_info:
            await client.send("validate_products", {"ids": [9]})

        assert exc_info.value.status == 502
        assert exc_info.value.message == "Some products were not found"

    async def test_send_without_subscribers(self, fake_redis, transport):
        fake_redis.publish = AsyncMock(return_value=0)
        client = RedisRpcClient(fake_redis, transport)

        with pytest.raises(RpcError) as exc_info:
            await client.send("create_product", {})

        assert exc_info.value.status == 503

    async def test_send_times_out(self, fake_redis, fake_pubsub, transport):
        client = RedisRpcClient(fake_redis, transport)

        with pytest.raises(RpcError) as exc_info:
            await client.send("create_product", {}, timeout=0.05)

        assert exc_info.value.status == 504
        fake_pubsub.aclose.assert_awaited_once()
