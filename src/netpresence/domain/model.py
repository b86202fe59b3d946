"""Presence records as they move from the store to the caller.

A registration is stored as an *identity string* ``"<name>|<address>"`` scored
with the epoch-millisecond time it was last seen. Parsing keeps two transient
fields (``key`` and ``position``) that the reconciliation passes rely on; only
``Device`` leaves the domain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypedDict

IDENTITY_SEPARATOR: Final[str] = "|"

type RawScore = str | bytes | int | float | None


class DeviceDict(TypedDict):
    name: str
    address: str
    last_seen: int


def encode_identity(name: str, address: str) -> str:
    """Join ``name`` and ``address`` into the stored identity string (no escaping)."""

    return f"{name}{IDENTITY_SEPARATOR}{address}"


def decode_identity(identity: str) -> tuple[str, str]:
    """Split on the first separator; further separators stay in the address."""

    name, _, address = identity.partition(IDENTITY_SEPARATOR)
    return name, address


@dataclass(frozen=True, slots=True)
class RawEntry:
    """One member of a registration key's ordered collection, score unparsed."""

    identity: str
    score: RawScore


@dataclass(frozen=True, slots=True)
class ParsedEntry:
    """A raw entry decoded into device fields.

    ``last_seen`` is ``None`` when the stored score is not a number.
    """

    key: str
    name: str
    address: str
    last_seen: int | None
    position: int

    def to_device(self) -> Device:
        if self.last_seen is None:
            raise ValueError(f"Entry {self.key!r} has no valid timestamp")
        return Device(name=self.name, address=self.address, last_seen=self.last_seen)


@dataclass(frozen=True, slots=True)
class Device:
    """Caller-visible device record."""

    name: str
    address: str
    last_seen: int

    def as_dict(self) -> DeviceDict:
        return {"name": self.name, "address": self.address, "last_seen": self.last_seen}
