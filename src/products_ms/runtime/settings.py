"""Environment variables read from the process environment and ``.env``.

Used to build the configuration when no ``config.yaml`` is present, so the
service can still be started from plain environment variables. ``PORT`` and
``DATABASE_URL`` are required in that mode.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.products_ms.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    TransportConfig,
)


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    port: int = Field(validation_alias="PORT")

    # Infrastructure URLs
    database_url: str = Field(validation_alias="DATABASE_URL")
    redis_url: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )

    def to_config(self) -> ConfigData:
        """Build a full configuration from the environment values."""
        return ConfigData(
            app=AppConfig(environment=self.environment, port=self.port),
            database=DatabaseConfig(url=self.database_url),
            transport=TransportConfig(url=self.redis_url),
            logging=LoggingConfig(level=self.log_level),
        )
