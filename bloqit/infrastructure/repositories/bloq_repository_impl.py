from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from bloqit.core.entities.bloq import Bloq
from bloqit.core.errors import IdentifierCollisionError
from bloqit.core.repositories.bloq_repository import BloqRepository
from bloqit.infrastructure.models.models import BloqModel
from bloqit.infrastructure.repositories.conditional_update import as_utc, conditional_update


class BloqRepositoryImpl(BloqRepository):
    """SQLAlchemy implementation for Bloq persistence."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, bloq_id: str) -> Bloq | None:
        row = self._db.get(BloqModel, bloq_id)
        if row is None:
            return None
        return self._to_entity(row)

    def list(self) -> list[Bloq]:
        rows = self._db.scalars(select(BloqModel).order_by(BloqModel.title, BloqModel.bloq_id))
        return [self._to_entity(row) for row in rows]

    def add(self, bloq: Bloq) -> Bloq:
        if self._db.get(BloqModel, bloq.bloq_id) is not None:
            raise IdentifierCollisionError(bloq.bloq_id)

        row = BloqModel(
            bloq_id=bloq.bloq_id,
            title=bloq.title,
            address=bloq.address,
            created_at=bloq.created_at,
            updated_at=bloq.updated_at,
        )
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(self, bloq_id: str, changes: Mapping[str, Any]) -> Bloq | None:
        result = self._db.execute(conditional_update(BloqModel, bloq_id, changes, None))
        if result.rowcount == 0:
            return None

        row = self._db.get(BloqModel, bloq_id, populate_existing=True)
        return self._to_entity(row)

    @staticmethod
    def _to_entity(row: BloqModel) -> Bloq:
        return Bloq(
            bloq_id=row.bloq_id,
            title=row.title,
            address=row.address,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
