from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import Delete, Update, delete, update


def _match(stmt, model: type, key: Any, expected: Mapping[str, Any] | None):
    pk = model.__mapper__.primary_key[0]
    stmt = stmt.where(pk == key)
    for column, value in (expected or {}).items():
        attr = getattr(model, column)
        stmt = stmt.where(attr.is_(None) if value is None else attr == value)
    return stmt


def conditional_update(model: type, key: Any, changes: Mapping[str, Any], expected: Mapping[str, Any] | None) -> Update:
    """
    Build `UPDATE model SET changes WHERE pk = key AND <expected>` for compare-and-set writes.

    A None in `expected` matches SQL NULL.
    """
    stmt = _match(update(model), model, key, expected)
    return stmt.values(**changes).execution_options(synchronize_session=False)


def conditional_delete(model: type, key: Any, expected: Mapping[str, Any] | None) -> Delete:
    """`DELETE FROM model WHERE pk = key AND <expected>`, same matching rules as conditional_update."""
    return _match(delete(model), model, key, expected).execution_options(synchronize_session=False)


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
