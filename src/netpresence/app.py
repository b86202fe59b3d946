"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from netpresence.adapters.redis import RedisPresenceStore
from netpresence.adapters.sqlalchemy import SqlAlchemyPresenceStore
from netpresence.config import StoreBackend, get_store_config
from netpresence.domain.presence import PresenceService

if TYPE_CHECKING:
    from netpresence.config import StoreConfig
    from netpresence.domain.model import Device
    from netpresence.domain.ports import PresenceStore


log = getLogger(__name__)


def build_store(config: StoreConfig | None = None) -> PresenceStore:
    """Create the configured presence store adapter."""

    effective = config or get_store_config()
    if effective.backend is StoreBackend.SQLALCHEMY:
        log.info("Using SQLAlchemy presence store")
        return SqlAlchemyPresenceStore.from_config(effective.database)
    log.info("Using Redis presence store at %s", effective.redis.display_target())
    return RedisPresenceStore.from_config(effective.redis)


def build_presence_service(*, store: PresenceStore | None = None) -> PresenceService:
    return PresenceService(store=store or build_store())


def register_device(
    network_key: str,
    name: str,
    address: str,
    *,
    service: PresenceService | None = None,
) -> None:
    """Register one device against ``network_key`` using the configured adapters."""

    effective = service or build_presence_service()
    effective.register(network_key, name, address)
    log.info("Registered %s (%s) on %s", name, address, network_key)


def discover_devices(
    network_key: str,
    *,
    service: PresenceService | None = None,
) -> list[Device]:
    """List the live devices of ``network_key`` using the configured adapters."""

    effective = service or build_presence_service()
    devices = effective.discover(network_key)
    log.info("Discovered %d devices on %s", len(devices), network_key)
    return devices
