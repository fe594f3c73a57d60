from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloqit.core.entities.rent import Rent, RentSize, RentStatus
from bloqit.core.errors import IdentifierCollisionError
from bloqit.core.repositories.rent_repository import RentRepository
from bloqit.infrastructure.models.models import RentModel
from bloqit.infrastructure.repositories.conditional_update import as_utc, conditional_update


class RentRepositoryImpl(RentRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, rent_id: str) -> Rent | None:
        row = self.db.get(RentModel, rent_id, populate_existing=True)
        if row is None:
            return None
        return self._to_entity(row)

    def list_by_locker(self, locker_id: str) -> list[Rent]:
        rows = self.db.scalars(
            select(RentModel)
            .where(RentModel.locker_id == locker_id)
            .order_by(RentModel.created_at, RentModel.rent_id)
        )
        return [self._to_entity(row) for row in rows]

    def _exists(self, rent_id: str) -> bool:
        return self.db.get(RentModel, rent_id) is not None

    def add(self, rent: Rent) -> Rent:
        if self._exists(rent.rent_id):
            raise IdentifierCollisionError(rent.rent_id)

        row = RentModel(
            rent_id=rent.rent_id,
            locker_id=rent.locker_id,
            weight=rent.weight,
            size=rent.size,
            status=rent.status,
            created_at=rent.created_at,
            dropped_off_at=rent.dropped_off_at,
            picked_up_at=rent.picked_up_at,
        )
        self.db.add(row)
        self.db.flush()
        return self._to_entity(row)

    def update(
        self,
        rent_id: str,
        changes: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> Rent | None:
        result = self.db.execute(conditional_update(RentModel, rent_id, changes, expected))
        if result.rowcount == 0:
            return None

        row = self.db.get(RentModel, rent_id, populate_existing=True)
        return self._to_entity(row)

    @staticmethod
    def _to_entity(row: RentModel) -> Rent:
        return Rent(
            rent_id=row.rent_id,
            locker_id=row.locker_id,
            weight=row.weight,
            size=RentSize(row.size) if not isinstance(row.size, RentSize) else row.size,
            status=RentStatus(row.status) if not isinstance(row.status, RentStatus) else row.status,
            created_at=as_utc(row.created_at),
            dropped_off_at=as_utc(row.dropped_off_at),
            picked_up_at=as_utc(row.picked_up_at),
        )
