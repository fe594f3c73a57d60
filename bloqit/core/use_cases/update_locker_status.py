from __future__ import annotations

import logging

from bloqit.core.entities.locker import Locker, LockerStatus
from bloqit.core.errors import NotFoundError
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_enum, require_id

logger = logging.getLogger(__name__)


class UpdateLockerStatusUseCase:
    """
    Open or close a locker door. Door status is independent of occupancy and of the
    hosted rent's status.
    """

    def __init__(self, *, locker_repo: LockerRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._uow = uow

    def execute(self, *, locker_id: str, status: LockerStatus | str) -> Locker:
        locker_id = require_id(locker_id, "locker_id")
        status = require_enum(LockerStatus, status, "status")

        with self._uow.transaction():
            locker = self._locker_repo.update(locker_id, {"status": status})
        if locker is None:
            raise NotFoundError("Locker not found")

        logger.info("Locker %s is now %s", locker_id, status.value)
        return locker
