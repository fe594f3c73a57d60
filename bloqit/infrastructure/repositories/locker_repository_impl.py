from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloqit.core.entities.locker import Locker, LockerStatus
from bloqit.core.errors import IdentifierCollisionError
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.infrastructure.models.models import LockerModel
from bloqit.infrastructure.repositories.conditional_update import conditional_delete, conditional_update


class LockerRepositoryImpl(LockerRepository):
    """
    Simple SQLAlchemy implementation for Locker.

    Writes are flushed, never committed: the unit of work owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: str) -> Locker | None:
        row = self._db.get(LockerModel, locker_id, populate_existing=True)
        if row is None:
            return None
        return self._to_entity(row)

    def list_by_bloq(self, bloq_id: str) -> list[Locker]:
        rows = self._db.scalars(
            select(LockerModel).where(LockerModel.bloq_id == bloq_id).order_by(LockerModel.locker_id)
        )
        return [self._to_entity(row) for row in rows]

    def add(self, locker: Locker) -> Locker:
        if self._db.get(LockerModel, locker.locker_id) is not None:
            raise IdentifierCollisionError(locker.locker_id)

        row = LockerModel(
            locker_id=locker.locker_id,
            bloq_id=locker.bloq_id,
            status=locker.status,
            is_occupied=locker.is_occupied,
            current_rent_id=locker.current_rent_id,
        )
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(
        self,
        locker_id: str,
        changes: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> Locker | None:
        result = self._db.execute(conditional_update(LockerModel, locker_id, changes, expected))
        if result.rowcount == 0:
            return None

        row = self._db.get(LockerModel, locker_id, populate_existing=True)
        return self._to_entity(row)

    def delete(self, locker_id: str, *, expected: Mapping[str, Any] | None = None) -> bool:
        result = self._db.execute(conditional_delete(LockerModel, locker_id, expected))
        if result.rowcount == 0:
            return False
        return True

    @staticmethod
    def _to_entity(row: LockerModel) -> Locker:
        return Locker(
            locker_id=row.locker_id,
            bloq_id=row.bloq_id,
            status=LockerStatus(row.status),
            is_occupied=row.is_occupied,
            current_rent_id=row.current_rent_id,
        )
