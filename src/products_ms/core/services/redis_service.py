"""Redis connection service backing the RPC transport."""

import redis.asyncio as redis_async
from loguru import logger
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError, TimeoutError
from redis.retry import Retry

from src.products_ms.runtime.config.config_data import ConfigData
from src.products_ms.runtime.context import get_config


class RedisService:
    """Owns the Redis client used by the RPC server and client.

    Mirrors DbSessionService: the client is created once, checked with
    ``health_check`` during start-up and released with ``close``.
    """

    def __init__(self, config: ConfigData | None = None, client: redis_async.Redis | None = None):
        """Initialize the Redis client with connection pooling."""
        transport = (config or get_config()).transport
        self._url = transport.url

        if client is not None:
            self._client = client
            return

        logger.info(
            "Initializing Redis client with connection string: {}",
            transport.sanitized_connection_string,
        )
        retry = Retry(
            ExponentialBackoff(base=1, cap=10),  # 1s, 2s, 4s, … up to 10s
            retries=6,
        )
        self._client = redis_async.from_url(
            transport.connection_string,
            encoding="utf-8",
            decode_responses=True,
            socket_keepalive=True,
            health_check_interval=30,
            retry=retry,
            retry_on_error=[ConnectionError, TimeoutError],
            client_name=(config or get_config()).app.name,
        )

    def get_client(self) -> redis_async.Redis:
        """Get the Redis async client instance."""
        if self._client is None:
            raise RuntimeError("Redis client has been closed")
        return self._client

    async def health_check(self) -> bool:
        """Return True when Redis answers PING."""
        if self._client is None:
            logger.warning("Redis client not initialized, health check failed")
            return False

        try:
            await self._client.ping()
            return True
        except Exception as e:
            logger.error(
                "Redis health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False

    async def close(self) -> None:
        """Close the Redis connection and clean up resources."""
        if self._client:
            try:
                logger.info("Closing Redis connection")
                await self._client.aclose()
                logger.info("Redis connection closed successfully")
            except Exception as e:
                logger.error(
                    "Error closing Redis connection",
                    extra={
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                    },
                )
            finally:
                self._client = None

    @property
    def url(self) -> str:
        """Get the Redis connection URL."""
        return self._url
