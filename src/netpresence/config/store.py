"""Backing store configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final
from urllib.parse import urlsplit, urlunsplit

from .env import env_float, env_int, first_env_var
from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "netpresence"
DEFAULT_DB_FILENAME: Final[str] = "netpresence.db"
DEFAULT_REDIS_HOST: Final[str] = "localhost"
DEFAULT_REDIS_PORT: Final[int] = 6379


class StoreBackend(StrEnum):
    REDIS = "redis"
    SQLALCHEMY = "sqlalchemy"


@dataclass(frozen=True, slots=True)
class RedisConfig:
    host: str = DEFAULT_REDIS_HOST
    port: int = DEFAULT_REDIS_PORT
    password: str | None = None
    url: str | None = None
    socket_timeout: float | None = None

    def display_target(self) -> str:
        """Where the client connects, with any password masked."""

        if not self.url:
            return f"{self.host}:{self.port}"
        parts = urlsplit(self.url)
        if parts.password is None:
            return self.url
        credentials = f"{parts.username}:***" if parts.username else ":***"
        host = parts.netloc.rpartition("@")[2]
        return urlunsplit(parts._replace(netloc=f"{credentials}@{host}"))


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


@dataclass(frozen=True, slots=True)
class StoreConfig:
    backend: StoreBackend
    redis: RedisConfig
    database: DatabaseConfig


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_data_dir() -> Path:
    """Return the directory holding the SQLite database, honouring overrides."""

    env_dir = first_env_var("NETPRESENCE_DATA_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return _default_data_dir()


def get_database_config() -> DatabaseConfig:
    env_uri = first_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{data_dir / DEFAULT_DB_FILENAME}")


def get_redis_config() -> RedisConfig:
    return RedisConfig(
        host=first_env_var("REDIS_HOST", "OPENSHIFT_REDIS_HOST") or DEFAULT_REDIS_HOST,
        port=env_int("REDIS_PORT", "OPENSHIFT_REDIS_PORT", default=DEFAULT_REDIS_PORT),
        password=first_env_var("REDIS_PASSWORD"),
        url=first_env_var("REDIS_URL"),
        socket_timeout=env_float("REDIS_SOCKET_TIMEOUT"),
    )


def get_store_config() -> StoreConfig:
    raw_backend = (first_env_var("NETPRESENCE_STORE") or StoreBackend.REDIS).lower()
    try:
        backend = StoreBackend(raw_backend)
    except ValueError as exc:
        choices = ", ".join(member.value for member in StoreBackend)
        raise ConfigurationError(
            f"Unknown store backend {raw_backend!r} (expected one of: {choices})"
        ) from exc

    # only resolve the database location when it is needed; it may create directories
    database = (
        get_database_config()
        if backend is StoreBackend.SQLALCHEMY
        else DatabaseConfig(uri=first_env_var("DATABASE_URI") or "")
    )
    return StoreConfig(backend=backend, redis=get_redis_config(), database=database)
