"""Ports implemented by backing-store adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .model import RawEntry


class StoreUnavailableError(RuntimeError):
    """Raised when the backing store cannot complete an operation."""

    def __init__(self, *, operation: str, network_key: str, reason: str | None = None) -> None:
        self.operation = operation
        self.network_key = network_key
        self.reason = reason
        message = f"Presence store unavailable during {operation} for {network_key!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@runtime_checkable
class PresenceStore(Protocol):
    """Ordered collections of scored members, one collection per network key.

    Implementations raise ``StoreUnavailableError`` for every failure.
    """

    def add(self, network_key: str, member: str, score: int) -> None:
        """Add ``member`` with ``score``; an existing member gets the new score."""
        ...

    def range_with_scores(self, network_key: str) -> Sequence[RawEntry]:
        """Return every member ordered by score ascending (empty when absent)."""
        ...

    def remove(self, network_key: str, members: Iterable[str]) -> None:
        """Remove ``members`` in a single request; absent members are ignored."""
        ...
