from __future__ import annotations

import logging

from bloqit.core.clock import Clock, utcnow
from bloqit.core.entities.rent import Rent, RentSize, RentStatus
from bloqit.core.errors import ConflictError, NotFoundError
from bloqit.core.identifiers import IdFactory, insert_with_fresh_id, new_id
from bloqit.core.policies import locker_occupancy
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.rent_repository import RentRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_enum, require_id, require_weight

logger = logging.getLogger(__name__)


class CreateRentUseCase:
    """
    Open a rent against an unoccupied locker and mark the locker occupied, as one unit.

    The locker is claimed with a compare-and-set on its occupancy columns, so of two
    concurrent calls against the same locker only one can win.
    """

    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        rent_repo: RentRepository,
        uow: UnitOfWork,
        id_factory: IdFactory = new_id,
        max_id_attempts: int = 3,
        clock: Clock = utcnow,
    ) -> None:
        self._locker_repo = locker_repo
        self._rent_repo = rent_repo
        self._uow = uow
        self._id_factory = id_factory
        self._max_id_attempts = max_id_attempts
        self._clock = clock

    def execute(self, *, locker_id: str, weight: float, size: RentSize | str) -> Rent:
        locker_id = require_id(locker_id, "locker_id")
        weight = require_weight(weight)
        size = require_enum(RentSize, size, "size")

        with self._uow.transaction():
            locker = self._locker_repo.get(locker_id)
            if locker is None:
                raise NotFoundError("Locker not found")
            locker_occupancy.ensure_available(locker)

            def _insert(rent_id: str) -> Rent:
                return self._rent_repo.add(
                    Rent(
                        rent_id=rent_id,
                        locker_id=locker_id,
                        weight=weight,
                        size=size,
                        status=RentStatus.CREATED,
                        created_at=self._clock(),
                    )
                )

            rent = insert_with_fresh_id(
                _insert,
                id_factory=self._id_factory,
                max_attempts=self._max_id_attempts,
            )

            claim = locker_occupancy.occupy(locker, rent.rent_id)
            if self._locker_repo.update(locker_id, claim.changes, expected=claim.expected) is None:
                raise ConflictError(f"Locker {locker_id!r} is already occupied")

        logger.info("Rent %s created in locker %s", rent.rent_id, locker_id)
        return rent
