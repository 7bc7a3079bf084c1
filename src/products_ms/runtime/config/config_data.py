"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import json
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="products-ms", description="Service name")
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=3001, description="Application port")
    base_path: str = Field(
        default="/products", description="Base path used when building resource links"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./products.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    password: str | None = Field(
        default=None, description="Password injected into the URL when it has none"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)

        if base_url.password:
            if self.password and self.password != base_url.password:
                logger.warning(
                    "Database password from configuration does not match the one in the URL. Using password from configuration."
                )
                base_url = base_url.set(password=self.password)
            return base_url.render_as_string(hide_password=False)

        if self.password:
            base_url = base_url.set(password=self.password)
        return base_url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class TransportConfig(BaseModel):
    """Redis request/reply transport configuration."""

    url: str = Field(default="redis://localhost:6379/0", description="Redis URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    channel_prefix: str = Field(
        default="", description="Prefix prepended to every pattern channel"
    )
    request_timeout: float = Field(
        default=5.0, description="Seconds a client waits for a reply"
    )
    max_concurrency: int = Field(
        default=32, description="Maximum messages handled concurrently"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password:
            if "@" in self.url:
                # URL already has auth info
                return self.url
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url

    @property
    def sanitized_connection_string(self) -> str:
        if self.password:
            return self.connection_string.replace(self.password, "****")
        return self.connection_string

    def channel_for(self, pattern: dict | str) -> str:
        """Return the channel name a message pattern is published on."""
        if isinstance(pattern, str):
            serialized = pattern
        else:
            serialized = json.dumps(pattern, separators=(",", ":"), sort_keys=True)
        return f"{self.channel_prefix}{serialized}"


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    transport: TransportConfig = Field(
        default_factory=TransportConfig, description="RPC transport configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
