"""Application services for registering devices and discovering peers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from netpresence.domain.freshness import FRESHNESS_WINDOW, now_millis
from netpresence.domain.model import IDENTITY_SEPARATOR, encode_identity
from netpresence.domain.reconciliation import commit_evictions, parse_entries, reconcile

if TYPE_CHECKING:
    from netpresence.domain.freshness import Clock, FreshnessWindow
    from netpresence.domain.model import Device
    from netpresence.domain.ports import PresenceStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PresenceService:
    """Register devices and list the live peers of a network key.

    ``StoreUnavailableError`` from the store propagates out of ``register`` and
    ``discover``; eviction failures never do.
    """

    store: PresenceStore
    clock: Clock = now_millis
    window: FreshnessWindow = FRESHNESS_WINDOW

    def register(
        self,
        network_key: str,
        name: str,
        address: str,
        *,
        now: int | None = None,
    ) -> None:
        """Record that ``name`` at ``address`` was seen on ``network_key``."""

        if IDENTITY_SEPARATOR in name:
            log.debug(
                "Device name %r contains %r; discovery reports the text after it as address",
                name,
                IDENTITY_SEPARATOR,
            )
        seen_at = self.clock() if now is None else now
        self.store.add(network_key, encode_identity(name, address), seen_at)
        log.debug("Registered %s at %s on %s (%d)", name, address, network_key, seen_at)

    def discover(self, network_key: str, *, now: int | None = None) -> list[Device]:
        """Return the live devices for ``network_key`` and evict what was filtered out."""

        raw = self.store.range_with_scores(network_key)
        entries = parse_entries(raw)
        result = reconcile(
            entries,
            now=self.clock() if now is None else now,
            window=self.window,
        )
        log.debug(
            "Reconciled %s: %d entries, %d live, %d stale",
            network_key,
            len(entries),
            len(result.live),
            len(result.stale_keys),
        )
        commit_evictions(self.store, network_key, result.stale_keys)
        return list(result.live)
