from __future__ import annotations

from bloqit.core.entities.rent import Rent
from bloqit.core.errors import NotFoundError
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.rent_repository import RentRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id


class GetRentUseCase:
    def __init__(self, *, rent_repo: RentRepository, uow: UnitOfWork) -> None:
        self._rent_repo = rent_repo
        self._uow = uow

    def execute(self, *, rent_id: str) -> Rent:
        rent_id = require_id(rent_id, "rent_id")
        with self._uow.transaction():
            rent = self._rent_repo.get(rent_id)
        if rent is None:
            raise NotFoundError("Rent not found")
        return rent


class GetRentsByLockerUseCase:
    """
    Rent history of a locker. An existing locker with no rents yields an empty list.
    """

    def __init__(self, *, locker_repo: LockerRepository, rent_repo: RentRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._rent_repo = rent_repo
        self._uow = uow

    def execute(self, *, locker_id: str) -> list[Rent]:
        locker_id = require_id(locker_id, "locker_id")
        with self._uow.transaction():
            if self._locker_repo.get(locker_id) is None:
                raise NotFoundError("Locker not found")
            return self._rent_repo.list_by_locker(locker_id)
