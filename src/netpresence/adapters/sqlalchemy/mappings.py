"""SQLAlchemy table metadata for presence registrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Column, Index, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

registration_table = Table(
    "presence_registration",
    metadata,
    Column("network_key", String(255), primary_key=True),
    Column("member", String(1024), primary_key=True),
    Column("score", BigInteger, nullable=False),
    Index("ix_presence_registration_key_score", "network_key", "score"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
