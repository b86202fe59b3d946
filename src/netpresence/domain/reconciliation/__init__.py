"""Reconciliation of stored registrations into the live device view.

Flow for one network key:
1) parse the raw ordered collection into entries (``parse``)
2) drop entries outside the freshness window (``engine``)
3) keep only the newest entry per device name (``engine``)
4) remove everything dropped from the store, best effort (``evict``)
"""

from __future__ import annotations

from .engine import ReconciliationResult, reconcile
from .evict import commit_evictions
from .parse import parse_entries, parse_score

__all__ = [
    "ReconciliationResult",
    "commit_evictions",
    "parse_entries",
    "parse_score",
    "reconcile",
]
