"""Database initialization script."""

from src.products_ms.core.services import DbManageService, DbSessionService
from src.products_ms.runtime.config.config_data import ConfigData
from src.products_ms.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    database_service = DbSessionService(config or get_config())
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.close()


if __name__ == "__main__":
    init_db()
