"""Domain layer: presence records, reconciliation and the presence service."""

from __future__ import annotations

from .model import Device, ParsedEntry, RawEntry, decode_identity, encode_identity
from .ports import PresenceStore, StoreUnavailableError
from .presence import PresenceService

__all__ = [
    "Device",
    "ParsedEntry",
    "PresenceService",
    "PresenceStore",
    "RawEntry",
    "StoreUnavailableError",
    "decode_identity",
    "encode_identity",
]
