"""RPC application factory and lifecycle."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger

from src.products_ms.api.rpc.app_data import ApplicationDependencies
from src.products_ms.api.rpc.dispatcher import MessageDispatcher
from src.products_ms.api.rpc.router import MessageRouter
from src.products_ms.api.rpc.routers.product import router as product_router
from src.products_ms.api.rpc.server import RedisRpcServer
from src.products_ms.core.services import DbSessionService, RedisService
from src.products_ms.runtime.config.config_data import ConfigData
from src.products_ms.runtime.context import get_config

__all__ = ["create_router", "lifespan", "serve"]


def create_router() -> MessageRouter:
    router = MessageRouter()
    router.include_router(product_router)
    return router


@asynccontextmanager
async def lifespan(config: ConfigData) -> AsyncIterator[ApplicationDependencies]:
    """Acquire the database engine and Redis client; release both on every exit.

    Failures while starting (unreachable database or Redis) still release
    whatever was already acquired.
    """
    database_service = DbSessionService(config)
    redis_service: RedisService | None = None
    try:
        if not database_service.health_check():
            raise RuntimeError("Database is not reachable")
        logger.info("Connected to the database")

        redis_service = RedisService(config)
        if not await redis_service.health_check():
            raise RuntimeError(f"Redis transport is not reachable at {redis_service.url}")

        yield ApplicationDependencies(
            database_service=database_service,
            redis_service=redis_service,
        )
    finally:
        logger.info("Shutting down application")
        if redis_service is not None:
            await redis_service.close()
        database_service.close()


async def serve(config: ConfigData | None = None, ready: asyncio.Event | None = None) -> None:
    """Run the products microservice until cancelled."""
    config = config or get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    async with lifespan(config) as deps:
        dispatcher = MessageDispatcher(
            create_router(), deps.database_service, config.app.base_path
        )
        server = RedisRpcServer(deps.redis_service.get_client(), dispatcher, config.transport)
        logger.info(
            "Connecting RPC transport at {} (port {})",
            config.transport.sanitized_connection_string,
            config.app.port,
        )
        await server.run(ready)
