"""
Insert-if-absent for rows keyed by a unique column.

Uses the dialect's ``INSERT ... ON CONFLICT DO NOTHING`` so two concurrent
first writes for the same key both succeed and end up on one row.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from db.base import Base


async def insert_if_absent(
    db: AsyncSession,
    model: type[Base],
    values: dict[str, Any],
    conflict_columns: list[str],
) -> None:
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise NotImplementedError(f"insert_if_absent does not support dialect {dialect!r}")
    await db.execute(stmt.on_conflict_do_nothing(index_elements=conflict_columns))
