from __future__ import annotations

import logging

from bloqit.core.entities.rent import Rent, RentStatus
from bloqit.core.policies import rent_transitions
from bloqit.core.use_cases.transition_rent import TransitionRentUseCase
from bloqit.core.validation import require_enum

logger = logging.getLogger(__name__)


class UpdateRentStatusUseCase(TransitionRentUseCase):
    """
    Administrative status override.

    Unlike dropoff/pickup this accepts any target status, including moving backwards. The
    locker pairing is still recomputed: leaving DELIVERED re-occupies the locker (and fails
    with a conflict if the locker has been given to another rent meanwhile), entering
    DELIVERED releases it.
    """

    def execute(self, *, rent_id: str, status: RentStatus | str) -> Rent:
        target = require_enum(RentStatus, status, "status")

        before, after = self._transition(
            rent_id,
            lambda current, now: rent_transitions.override(current, target, at=now),
        )
        if before.status is not after.status:
            logger.warning(
                "Administrative status change for rent %s: %s -> %s",
                after.rent_id,
                before.status.value,
                after.status.value,
            )
        return after
