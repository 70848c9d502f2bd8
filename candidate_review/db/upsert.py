"""Dialect-aware INSERT ... ON CONFLICT helpers."""

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_insert(db: AsyncSession, table: Table):
    """
    Return an INSERT construct for ``table`` that supports ``on_conflict_do_update``.

    The store's native conflict resolution is the only concurrency control
    for review and progress rows, so only dialects that expose it are allowed.
    """
    dialect_name = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect_name)
    if insert is None:
        raise ValueError(f"Upsert is not supported on dialect '{dialect_name}'")
    return insert(table)
