from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError

from netpresence.adapters.sqlalchemy import SqlAlchemyPresenceStore
from netpresence.config.store import DatabaseConfig
from netpresence.domain.model import RawEntry
from netpresence.domain.ports import PresenceStore, StoreUnavailableError
from netpresence.domain.presence import PresenceService

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sqlalchemy.engine import Connection, Engine


@pytest.fixture
def sql_store(sqlite_engine: Engine) -> SqlAlchemyPresenceStore:
    return SqlAlchemyPresenceStore(sqlite_engine)


def test_store_creates_its_table(sqlite_engine: Engine) -> None:
    SqlAlchemyPresenceStore(sqlite_engine)

    assert "presence_registration" in inspect(sqlite_engine).get_table_names()


def test_sqlalchemy_store_satisfies_port(sql_store: SqlAlchemyPresenceStore) -> None:
    assert isinstance(sql_store, PresenceStore)


def test_range_orders_by_score_then_member(sql_store: SqlAlchemyPresenceStore) -> None:
    sql_store.add("10.0.0.1", "c|3", 300)
    sql_store.add("10.0.0.1", "b|2", 100)
    sql_store.add("10.0.0.1", "a|1", 100)
    sql_store.add("10.0.0.2", "z|9", 1)

    assert sql_store.range_with_scores("10.0.0.1") == [
        RawEntry("a|1", 100),
        RawEntry("b|2", 100),
        RawEntry("c|3", 300),
    ]


def test_add_existing_member_updates_score(sql_store: SqlAlchemyPresenceStore) -> None:
    sql_store.add("10.0.0.1", "tv|1", 100)
    sql_store.add("10.0.0.1", "tv|1", 500)

    assert sql_store.range_with_scores("10.0.0.1") == [RawEntry("tv|1", 500)]


def test_range_of_unknown_key_is_empty(sql_store: SqlAlchemyPresenceStore) -> None:
    assert sql_store.range_with_scores("nowhere") == []


def test_remove_deletes_only_given_members_of_key(sql_store: SqlAlchemyPresenceStore) -> None:
    sql_store.add("10.0.0.1", "a|1", 1)
    sql_store.add("10.0.0.1", "b|2", 2)
    sql_store.add("10.0.0.2", "a|1", 1)

    sql_store.remove("10.0.0.1", ["a|1", "ghost|0"])

    assert sql_store.range_with_scores("10.0.0.1") == [RawEntry("b|2", 2)]
    assert sql_store.range_with_scores("10.0.0.2") == [RawEntry("a|1", 1)]


def test_service_round_trip_against_sqlite(sql_store: SqlAlchemyPresenceStore) -> None:
    service = PresenceService(store=sql_store, clock=lambda: 10_000_000)
    service.register("10.0.0.1", "alice", "1.1.1.1", now=9_000_000)
    service.register("10.0.0.1", "alice", "1.1.1.2", now=9_500_000)
    service.register("10.0.0.1", "bob", "2.2.2.2", now=1_000_000)

    devices = service.discover("10.0.0.1")

    assert [(device.name, device.address) for device in devices] == [("alice", "1.1.1.2")]
    assert sql_store.range_with_scores("10.0.0.1") == [RawEntry("alice|1.1.1.2", 9_500_000)]


@pytest.mark.parametrize(
    ("operation", "call"),
    [
        ("add", lambda store: store.add("10.0.0.1", "m|1", 1)),
        ("range", lambda store: store.range_with_scores("10.0.0.1")),
        ("remove", lambda store: store.remove("10.0.0.1", ["m|1"])),
    ],
)
def test_database_errors_become_store_unavailable(
    tmp_path: Path,
    operation: str,
    call: Callable[[SqlAlchemyPresenceStore], object],
) -> None:
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path}/presence.db", future=True)
    store = SqlAlchemyPresenceStore(engine, create_tables=False)

    with pytest.raises(StoreUnavailableError) as excinfo:
        call(store)

    assert excinfo.value.operation == operation
    assert excinfo.value.network_key == "10.0.0.1"
    assert isinstance(excinfo.value.__cause__, SQLAlchemyError)
    engine.dispose()


class _LosesFirstUpdateRace(SqlAlchemyPresenceStore):
    """Reports no matching row on the first UPDATE, as if a concurrent add had not committed yet."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)
        self.updates = 0

    def _update_score(
        self, connection: Connection, network_key: str, member: str, score: int
    ) -> int:
        self.updates += 1
        if self.updates == 1:
            return 0
        return super()._update_score(connection, network_key, member, score)


def test_add_retries_update_when_concurrent_insert_wins(sqlite_engine: Engine) -> None:
    SqlAlchemyPresenceStore(sqlite_engine).add("10.0.0.1", "tv|1", 100)
    store = _LosesFirstUpdateRace(sqlite_engine)

    store.add("10.0.0.1", "tv|1", 500)

    assert store.updates == 2
    assert store.range_with_scores("10.0.0.1") == [RawEntry("tv|1", 500)]


def test_from_config_uses_database_uri(tmp_path: Path) -> None:
    store = SqlAlchemyPresenceStore.from_config(
        DatabaseConfig(uri=f"sqlite+pysqlite:///{tmp_path}/netpresence.db")
    )
    store.add("k", "m|1", 7)

    assert store.range_with_scores("k") == [RawEntry("m|1", 7)]
    store.close()
