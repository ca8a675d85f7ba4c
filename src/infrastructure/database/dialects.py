"""Dialect-specific helpers for conflict-aware writes."""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# Both constructs expose on_conflict_do_update / on_conflict_do_nothing
_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def conflict_insert(session: AsyncSession, model: Any) -> Any:
    """Build an INSERT for ``model`` that supports ON CONFLICT clauses."""
    dialect = session.get_bind().dialect.name
    try:
        insert = _INSERT_BY_DIALECT[dialect]
    except KeyError:
        raise RuntimeError(f"ON CONFLICT inserts are not supported on {dialect}") from None
    return insert(model)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for unique or primary key violations, False for NOT NULL, FK and the rest."""
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig
