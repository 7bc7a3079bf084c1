from dataclasses import dataclass

from src.products_ms.core.services import DbSessionService, RedisService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    redis_service: RedisService
