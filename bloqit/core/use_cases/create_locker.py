from __future__ import annotations

import logging

from bloqit.core.entities.locker import Locker, LockerStatus
from bloqit.core.errors import NotFoundError
from bloqit.core.identifiers import IdFactory, insert_with_fresh_id, new_id
from bloqit.core.repositories.bloq_repository import BloqRepository
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id

logger = logging.getLogger(__name__)


class CreateLockerUseCase:
    """New lockers start CLOSED and unoccupied."""

    def __init__(
        self,
        *,
        bloq_repo: BloqRepository,
        locker_repo: LockerRepository,
        uow: UnitOfWork,
        id_factory: IdFactory = new_id,
        max_id_attempts: int = 3,
    ) -> None:
        self._bloq_repo = bloq_repo
        self._locker_repo = locker_repo
        self._uow = uow
        self._id_factory = id_factory
        self._max_id_attempts = max_id_attempts

    def execute(self, *, bloq_id: str) -> Locker:
        bloq_id = require_id(bloq_id, "bloq_id")

        with self._uow.transaction():
            if self._bloq_repo.get(bloq_id) is None:
                raise NotFoundError("Bloq not found")

            locker = insert_with_fresh_id(
                lambda locker_id: self._locker_repo.add(
                    Locker(locker_id=locker_id, bloq_id=bloq_id, status=LockerStatus.CLOSED, is_occupied=False)
                ),
                id_factory=self._id_factory,
                max_attempts=self._max_id_attempts,
            )

        logger.info("Locker %s created in bloq %s", locker.locker_id, bloq_id)
        return locker
