from __future__ import annotations

from dataclasses import dataclass

from bloqit.core.errors import NotFoundError
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id


@dataclass(frozen=True, slots=True)
class LockerOccupancyDTO:
    """
    Use-case return type for GET /api/lockers/{locker_id}/is-occupied

    Note: returns only the hosted rent id (nullable), not a rent object.
    """
    locker_id: str
    is_occupied: bool
    current_rent_id: str | None


class GetLockerOccupancyUseCase:
    def __init__(self, *, locker_repo: LockerRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._uow = uow

    def execute(self, *, locker_id: str) -> LockerOccupancyDTO:
        locker_id = require_id(locker_id, "locker_id")
        with self._uow.transaction():
            locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")

        return LockerOccupancyDTO(
            locker_id=locker.locker_id,
            is_occupied=locker.is_occupied,
            current_rent_id=locker.current_rent_id,
        )
