"""In-process stand-ins for the Redis pub/sub client."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest


class FakePubSub:
    """Feeds queued messages to ``listen`` until ``None`` is queued."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue = asyncio.Queue()
        self.subscribe = AsyncMock()
        self.unsubscribe = AsyncMock()
        self.aclose = AsyncMock()

    def push(self, channel: str, data: Any) -> None:
        if not isinstance(data, str):
            data = json.dumps(data)
        self.queue.put_nowait({"type": "message", "channel": channel, "data": data})

    def stop(self) -> None:
        self.queue.put_nowait(None)

    async def listen(self):
        while True:
            message = await self.queue.get()
            if message is None:
                return
            yield message


@pytest.fixture
def fake_pubsub() -> FakePubSub:
    return FakePubSub()


@pytest.fixture
def fake_redis(fake_pubsub: FakePubSub) -> Mock:
    client = Mock()
    client.pubsub = Mock(return_value=fake_pubsub)
    client.publish = AsyncMock(return_value=1)
    return client


@pytest.fixture
def reply_with(fake_redis: Mock, fake_pubsub: FakePubSub) -> Callable[[Callable[[dict], dict | None]], None]:
    """Make ``publish`` answer each request packet with ``responder(packet)``."""

    def _install(responder: Callable[[dict], dict | None]) -> None:
        async def _publish(channel: str, raw: str) -> int:
            packet = json.loads(raw)
            reply = responder(packet)
            if reply is not None:
                fake_pubsub.push(f"{channel}.reply", reply)
            return 1

        fake_redis.publish = AsyncMock(side_effect=_publish)

    return _install
