"""Best-effort removal of reconciled-away entries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from netpresence.domain.ports import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from netpresence.domain.ports import PresenceStore

log = logging.getLogger(__name__)


def commit_evictions(store: PresenceStore, network_key: str, stale_keys: Sequence[str]) -> bool:
    """Remove ``stale_keys`` in one batched call.

    Returns ``False`` when the store rejected the removal. The failure is logged
    and not raised: entries left behind are evicted again by the next query.
    """

    if not stale_keys:
        return True
    try:
        store.remove(network_key, stale_keys)
    except StoreUnavailableError as exc:
        log.warning(
            "Could not evict %d stale entries for %s: %s", len(stale_keys), network_key, exc
        )
        return False
    log.info("Evicted %d stale entries for %s", len(stale_keys), network_key)
    return True
