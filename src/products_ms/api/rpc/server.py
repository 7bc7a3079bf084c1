"""Redis request/reply server.

Packets follow the NestJS Redis transport shape so existing gateways can
talk to this service unchanged:

- requests arrive on the channel named after the JSON pattern, e.g.
  ``{"cmd":"find_one_product"}``, as ``{"pattern", "data", "id"}``;
- replies go to ``<channel>.reply`` as ``{"id", "response", "isDisposed"}``
  or ``{"id", "err", "isDisposed"}``;
- packets without ``id`` are events and get no reply.
"""

import asyncio
import json
import time
from typing import Any

from loguru import logger
from redis.asyncio import Redis

from src.products_ms.api.rpc.dispatcher import MessageDispatcher
from src.products_ms.api.rpc.router import pattern_key
from src.products_ms.core.exceptions import ProductServiceError
from src.products_ms.runtime.config.config_data import TransportConfig

INTERNAL_ERROR = {"status": 500, "message": "Internal server error"}


class RedisRpcServer:
    def __init__(
        self,
        client: Redis,
        dispatcher: MessageDispatcher,
        transport: TransportConfig,
    ) -> None:
        self._client = client
        self._dispatcher = dispatcher
        self._transport = transport
        self._semaphore = asyncio.Semaphore(transport.max_concurrency)
        self._tasks: set[asyncio.Task] = set()

    @property
    def channels(self) -> list[str]:
        return [self._transport.channel_for(route.pattern) for route in self._dispatcher.router.routes]

    def _pattern_from_channel(self, channel: str) -> str:
        return channel[len(self._transport.channel_prefix):]

    async def handle_packet(self, channel: str, raw: str | bytes) -> dict[str, Any] | None:
        """Process one inbound packet and return the reply packet, if any."""
        try:
            packet = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Dropping malformed packet on {}", channel)
            return None
        if not isinstance(packet, dict):
            logger.warning("Dropping non-object packet on {}", channel)
            return None

        request_id = packet.get("id")
        pattern = packet.get("pattern") or self._pattern_from_channel(channel)

        with logger.contextualize(request_id=request_id or "-", pattern=pattern_key(pattern)):
            start = time.perf_counter()
            logger.info("message.start")
            try:
                response = await self._dispatcher.dispatch(pattern, packet.get("data"))
            except ProductServiceError as exc:
                logger.bind(
                    status=int(exc.status),
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                    error_type=type(exc).__name__,
                ).info("message.error: {}", exc.message)
                reply = {"err": exc.to_payload()}
            except Exception as exc:
                logger.bind(
                    status=500,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                    error_type=type(exc).__name__,
                ).exception("message.error")
                reply = {"err": dict(INTERNAL_ERROR)}
            else:
                logger.bind(
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                ).info("message.end")
                reply = {"response": response}

        if request_id is None:
            return None
        return {"id": request_id, **reply, "isDisposed": True}

    async def _process(self, channel: str, raw: str | bytes) -> None:
        async with self._semaphore:
            reply = await self.handle_packet(channel, raw)
            if reply is not None:
                await self._client.publish(f"{channel}.reply", json.dumps(reply))

    def _spawn(self, channel: str, raw: str | bytes) -> None:
        task = asyncio.create_task(self._process(channel, raw))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def run(self, ready: asyncio.Event | None = None) -> None:
        """Subscribe to every routed pattern and serve until cancelled."""
        pubsub = self._client.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(*self.channels)
        logger.info("Products microservice listening on {} message patterns", len(self.channels))
        if ready is not None:
            ready.set()

        try:
            async for message in pubsub.listen():
                if message is None or message.get("type") != "message":
                    continue
                self._spawn(message["channel"], message["data"])
        finally:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            await pubsub.unsubscribe()
            await pubsub.aclose()
