"""Redis RPC transport: routing, dispatch, server and client."""

from .client import RedisRpcClient, RpcError
from .dispatcher import MessageDispatcher
from .router import MessageRouter, pattern_key
from .server import RedisRpcServer

__all__ = [
    "MessageDispatcher",
    "MessageRouter",
    "RedisRpcClient",
    "RedisRpcServer",
    "RpcError",
    "pattern_key",
]
