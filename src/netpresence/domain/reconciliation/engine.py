"""Freshness and duplicate-name reconciliation for one network key.

Both passes walk the entries from the end towards the start and build new
sequences instead of splicing the input. Survivors keep their input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from netpresence.domain.freshness import FRESHNESS_WINDOW

if TYPE_CHECKING:
    from collections.abc import Sequence

    from netpresence.domain.freshness import FreshnessWindow
    from netpresence.domain.model import Device, ParsedEntry


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Live devices plus the identity strings to evict from the store."""

    live: tuple[Device, ...] = ()
    stale_keys: tuple[str, ...] = ()


def reconcile(
    entries: Sequence[ParsedEntry],
    *,
    now: int,
    window: FreshnessWindow = FRESHNESS_WINDOW,
) -> ReconciliationResult:
    """Reduce parsed entries to at most one fresh entry per device name.

    An entry is evicted when its score is not a number, when it is older than
    ``window`` at ``now``, or when another entry with the same name was seen
    more recently. On an exact timestamp tie the entry with the smaller
    position survives.
    """

    evicted: list[str] = []
    fresh = _drop_expired(entries, cutoff=window.cutoff(now), evicted=evicted)
    survivors = _drop_superseded(fresh, evicted=evicted)
    # an identity listed twice in one snapshot must not evict its own survivor
    live_keys = {entry.key for entry in survivors}
    return ReconciliationResult(
        live=tuple(entry.to_device() for entry in survivors),
        stale_keys=tuple(key for key in dict.fromkeys(evicted) if key not in live_keys),
    )


def _drop_expired(
    entries: Sequence[ParsedEntry],
    *,
    cutoff: int,
    evicted: list[str],
) -> list[ParsedEntry]:
    kept: list[ParsedEntry] = []
    for entry in reversed(entries):
        if entry.last_seen is None or entry.last_seen < cutoff:
            evicted.append(entry.key)
            continue
        kept.append(entry)
    kept.reverse()
    return kept


def _drop_superseded(
    entries: Sequence[ParsedEntry],
    *,
    evicted: list[str],
) -> list[ParsedEntry]:
    # every entry here has a timestamp; _drop_expired removed the rest
    best_by_name: dict[str, ParsedEntry] = {}
    for entry in reversed(entries):
        best = best_by_name.get(entry.name)
        if best is None:
            best_by_name[entry.name] = entry
        elif _seen(entry) >= _seen(best):
            evicted.append(best.key)
            best_by_name[entry.name] = entry
        else:
            evicted.append(entry.key)

    return [entry for entry in entries if best_by_name[entry.name] is entry]


def _seen(entry: ParsedEntry) -> int:
    if entry.last_seen is None:
        raise ValueError(f"Entry {entry.key!r} reached duplicate filtering without a timestamp")
    return entry.last_seen
