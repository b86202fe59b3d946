"""SQLAlchemy adapter package for netpresence."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, registration_table
from .store import SqlAlchemyPresenceStore

__all__ = [
    "SqlAlchemyPresenceStore",
    "create_all_tables",
    "metadata",
    "registration_table",
]
