"""Dialect-aware bulk insert helpers."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


async def insert_ignore_duplicates(
    db: AsyncSession, model: type, rows: Sequence[dict[str, Any]]
) -> None:
    """Insert ``rows`` into ``model``'s table, skipping rows that hit a unique constraint.

    Does not commit.
    """
    if not rows:
        return

    dialect = db.get_bind().dialect.name
    table = model.__table__
    if dialect == "postgresql":
        stmt = pg_insert(table).values(list(rows)).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite_insert(table).values(list(rows)).on_conflict_do_nothing()
    elif dialect in ("mysql", "mariadb"):
        stmt = insert(table).values(list(rows)).prefix_with("IGNORE")
    else:
        raise ValueError(f"Unsupported database dialect for insert_ignore_duplicates: {dialect!r}")
    await db.execute(stmt)
