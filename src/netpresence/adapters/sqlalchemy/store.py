"""Presence store backed by a relational table via SQLAlchemy Core."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from netpresence.adapters.sqlalchemy.mappings import create_all_tables, registration_table
from netpresence.domain.model import RawEntry
from netpresence.domain.ports import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.engine import Connection, Engine

    from netpresence.config.store import DatabaseConfig

log = logging.getLogger(__name__)


class SqlAlchemyPresenceStore:
    """Rows keyed by ``(network_key, member)``; adding an existing member updates its score."""

    def __init__(self, engine: Engine, *, create_tables: bool = True) -> None:
        self.engine = engine
        if create_tables:
            create_all_tables(engine)

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> SqlAlchemyPresenceStore:
        return cls(create_engine(config.uri, future=True))

    def add(self, network_key: str, member: str, score: int) -> None:
        try:
            try:
                with self.engine.begin() as connection:
                    if not self._update_score(connection, network_key, member, score):
                        self._insert(connection, network_key, member, score)
            except IntegrityError:
                # a concurrent add inserted the row between our UPDATE and INSERT
                with self.engine.begin() as connection:
                    self._update_score(connection, network_key, member, score)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(
                operation="add", network_key=network_key, reason=str(exc)
            ) from exc

    def _update_score(
        self, connection: Connection, network_key: str, member: str, score: int
    ) -> int:
        table = registration_table
        return connection.execute(
            update(table)
            .where(table.c.network_key == network_key)
            .where(table.c.member == member)
            .values(score=score)
        ).rowcount

    def _insert(self, connection: Connection, network_key: str, member: str, score: int) -> None:
        connection.execute(
            insert(registration_table).values(network_key=network_key, member=member, score=score)
        )

    def range_with_scores(self, network_key: str) -> list[RawEntry]:
        table = registration_table
        stmt = (
            select(table.c.member, table.c.score)
            .where(table.c.network_key == network_key)
            .order_by(table.c.score, table.c.member)
        )
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(
                operation="range", network_key=network_key, reason=str(exc)
            ) from exc
        return [RawEntry(identity=member, score=score) for member, score in rows]

    def remove(self, network_key: str, members: Iterable[str]) -> None:
        batch = list(members)
        if not batch:
            return
        table = registration_table
        try:
            with self.engine.begin() as connection:
                removed = connection.execute(
                    delete(table)
                    .where(table.c.network_key == network_key)
                    .where(table.c.member.in_(batch))
                ).rowcount
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(
                operation="remove", network_key=network_key, reason=str(exc)
            ) from exc
        log.debug("Deleted %s of %d members for %s", removed, len(batch), network_key)

    def close(self) -> None:
        self.engine.dispose()
