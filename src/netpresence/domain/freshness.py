"""Clock and freshness window used to decide which registrations are still visible."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Final, Protocol

MILLIS_PER_SECOND: Final[int] = 1000


class Clock(Protocol):
    def __call__(self) -> int: ...


def now_millis() -> int:
    """Return the current wall-clock time in epoch milliseconds."""

    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class FreshnessWindow:
    """Maximum age of a registration that is still considered live."""

    duration: timedelta = timedelta(minutes=60)

    def __post_init__(self) -> None:
        if self.duration < timedelta(0):
            raise ValueError("Freshness window must be non-negative")

    @property
    def millis(self) -> int:
        return int(self.duration.total_seconds() * MILLIS_PER_SECOND)

    def cutoff(self, now: int) -> int:
        """Oldest ``last_seen`` (inclusive) that survives at time ``now``."""

        return now - self.millis


FRESHNESS_WINDOW: Final[FreshnessWindow] = FreshnessWindow()


__all__ = ["FRESHNESS_WINDOW", "Clock", "FreshnessWindow", "now_millis"]
