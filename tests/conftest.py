from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from netpresence.domain.presence import PresenceService
from tests.support.presence_store import InMemoryPresenceStore

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

NOW = 1_700_000_000_000


@pytest.fixture
def now() -> int:
    return NOW


@pytest.fixture
def memory_store() -> InMemoryPresenceStore:
    return InMemoryPresenceStore()


@pytest.fixture
def presence_service(memory_store: InMemoryPresenceStore, now: int) -> PresenceService:
    return PresenceService(store=memory_store, clock=lambda: now)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        yield engine
    finally:
        engine.dispose()
