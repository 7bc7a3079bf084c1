"""Redis request/reply client for calling the products microservice."""

import asyncio
import json
import uuid
from typing import Any

from loguru import logger
from redis.asyncio import Redis

from src.products_ms.runtime.config.config_data import TransportConfig


class RpcError(Exception):
    """Error reply received from the remote service."""

    def __init__(self, status: int, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.payload = payload or {}


class RedisRpcClient:
    def __init__(self, client: Redis, transport: TransportConfig) -> None:
        self._client = client
        self._transport = transport

    async def send(
        self,
        cmd: str | dict[str, Any],
        data: Any = None,
        timeout: float | None = None,
    ) -> Any:
        """Publish a request and wait for the correlated reply.

        Raises:
            RpcError: The service replied with an error, nobody is subscribed
                to the pattern, or no reply arrived within ``timeout``.
        """
        pattern = {"cmd": cmd} if isinstance(cmd, str) else cmd
        channel = self._transport.channel_for(pattern)
        reply_channel = f"{channel}.reply"
        request_id = str(uuid.uuid4())
        timeout = self._transport.request_timeout if timeout is None else timeout

        pubsub = self._client.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(reply_channel)
        try:
            packet = json.dumps({"pattern": pattern, "data": data, "id": request_id})
            receivers = await self._client.publish(channel, packet)
            if not receivers:
                raise RpcError(503, f"No service is subscribed to {channel}")

            logger.debug("Sent request {} on {}", request_id, channel)
            try:
                async with asyncio.timeout(timeout):
                    return await self._wait_for_reply(pubsub, request_id)
            except TimeoutError as exc:
                raise RpcError(504, f"No reply on {reply_channel} within {timeout}s") from exc
        finally:
            await pubsub.unsubscribe(reply_channel)
            await pubsub.aclose()

    async def _wait_for_reply(self, pubsub, request_id: str) -> Any:
        async for message in pubsub.listen():
            if message is None or message.get("type") != "message":
                continue
            try:
                reply = json.loads(message["data"])
            except (TypeError, ValueError):
                logger.warning("Ignoring malformed reply packet")
                continue
            if reply.get("id") != request_id:
                continue

            err = reply.get("err")
            if err is not None:
                if isinstance(err, dict):
                    raise RpcError(int(err.get("status", 500)), str(err.get("message", "")), err)
                raise RpcError(500, str(err))
            return reply.get("response")

        raise RpcError(500, "Reply subscription closed before a reply arrived")
