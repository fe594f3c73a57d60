from __future__ import annotations

import logging

from bloqit.core.errors import ConflictError, NotFoundError
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.rent_repository import RentRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id

logger = logging.getLogger(__name__)


class DeleteLockerUseCase:
    """
    Remove a locker from its bloq.

    Rents are kept forever, so only a free locker that never hosted a rent can go. The
    delete itself is conditioned on the locker still being free, so a rent created
    concurrently makes one of the two calls fail.
    """

    def __init__(self, *, locker_repo: LockerRepository, rent_repo: RentRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._rent_repo = rent_repo
        self._uow = uow

    def execute(self, *, locker_id: str) -> None:
        locker_id = require_id(locker_id, "locker_id")

        with self._uow.transaction():
            locker = self._locker_repo.get(locker_id)
            if locker is None:
                raise NotFoundError("Locker not found")
            if locker.is_occupied or locker.current_rent_id is not None:
                raise ConflictError(f"Locker {locker_id!r} is occupied")
            if self._rent_repo.list_by_locker(locker_id):
                raise ConflictError(f"Locker {locker_id!r} has rent history and cannot be deleted")

            deleted = self._locker_repo.delete(
                locker_id,
                expected={"is_occupied": False, "current_rent_id": None},
            )
            if not deleted:
                raise ConflictError(f"Locker {locker_id!r} changed while being deleted")

        logger.info("Locker %s deleted", locker_id)
