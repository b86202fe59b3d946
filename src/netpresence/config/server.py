"""HTTP server configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from .env import env_flag, env_int, first_env_var
from .errors import ConfigurationError

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8080
DEFAULT_PROXY_HOPS: Final[int] = 1

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    trust_proxy: bool = True
    proxy_hops: int = DEFAULT_PROXY_HOPS


def get_server_config() -> ServerConfig:
    host = first_env_var("NETPRESENCE_HOST", "OPENSHIFT_NODEJS_IP")
    if host is None:
        log.warning("No NETPRESENCE_HOST configured, binding to %s", DEFAULT_HOST)
        host = DEFAULT_HOST
    proxy_hops = env_int("NETPRESENCE_PROXY_HOPS", default=DEFAULT_PROXY_HOPS)
    if proxy_hops < 1:
        raise ConfigurationError(f"NETPRESENCE_PROXY_HOPS must be at least 1, got {proxy_hops}")
    return ServerConfig(
        host=host,
        port=env_int("NETPRESENCE_PORT", "OPENSHIFT_NODEJS_PORT", default=DEFAULT_PORT),
        trust_proxy=env_flag("NETPRESENCE_TRUST_PROXY", default=True),
        proxy_hops=proxy_hops,
    )
