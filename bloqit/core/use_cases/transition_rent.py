from __future__ import annotations

from datetime import datetime
from typing import Callable

from bloqit.core.clock import Clock, utcnow
from bloqit.core.entities.rent import Rent
from bloqit.core.errors import ConflictError, InvalidTransitionError, NotFoundError
from bloqit.core.policies import locker_occupancy
from bloqit.core.policies.rent_transitions import RentTransition
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.rent_repository import RentRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id

Planner = Callable[[Rent, datetime], RentTransition]


class TransitionRentUseCase:
    """
    Shared load -> validate -> apply-both sequence for rent status changes.

    The rent row is written conditionally on the status it was validated against, and the
    paired locker row conditionally on its occupancy, inside one transaction. If either
    conditional write misses, the transaction is rolled back and nothing changes.
    """

    def __init__(
        self,
        *,
        rent_repo: RentRepository,
        locker_repo: LockerRepository,
        uow: UnitOfWork,
        clock: Clock = utcnow,
    ) -> None:
        self._rent_repo = rent_repo
        self._locker_repo = locker_repo
        self._uow = uow
        self._clock = clock

    def _transition(self, rent_id: str, plan: Planner) -> tuple[Rent, Rent]:
        """Returns (rent before, rent after)."""
        rent_id = require_id(rent_id, "rent_id")

        with self._uow.transaction():
            rent = self._rent_repo.get(rent_id)
            if rent is None:
                raise NotFoundError("Rent not found")

            transition = plan(rent, self._clock())
            if transition.is_noop:
                return rent, rent

            locker_update = None
            if transition.occupies_locker or transition.releases_locker:
                locker = self._locker_repo.get(rent.locker_id)
                if locker is None:
                    raise NotFoundError(f"Locker {rent.locker_id!r} of rent {rent_id!r} no longer exists")
                locker_update = locker_occupancy.pair(locker, transition)

            updated = self._rent_repo.update(
                rent_id,
                transition.changes,
                expected={"status": transition.source},
            )
            if updated is None:
                current = self._rent_repo.get(rent_id)
                if current is None:
                    raise NotFoundError("Rent not found")
                raise InvalidTransitionError(rent_id, current.status, transition.target)

            if locker_update is not None:
                applied = self._locker_repo.update(
                    locker_update.locker_id,
                    locker_update.changes,
                    expected=locker_update.expected,
                )
                if applied is None:
                    raise ConflictError(f"Locker {locker_update.locker_id!r} changed while updating rent {rent_id!r}")

        return rent, updated
