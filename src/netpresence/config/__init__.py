"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .server import ServerConfig, get_server_config
from .store import (
    DatabaseConfig,
    RedisConfig,
    StoreBackend,
    StoreConfig,
    get_database_config,
    get_redis_config,
    get_store_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "RedisConfig",
    "ServerConfig",
    "StoreBackend",
    "StoreConfig",
    "get_database_config",
    "get_redis_config",
    "get_server_config",
    "get_store_config",
]
