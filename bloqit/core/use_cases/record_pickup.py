from __future__ import annotations

import logging

from bloqit.core.entities.rent import Rent
from bloqit.core.policies import rent_transitions
from bloqit.core.use_cases.transition_rent import TransitionRentUseCase

logger = logging.getLogger(__name__)


class RecordPickupUseCase(TransitionRentUseCase):
    """WAITING_PICKUP -> DELIVERED, freeing the locker in the same transaction."""

    def execute(self, *, rent_id: str) -> Rent:
        _, rent = self._transition(rent_id, lambda current, now: rent_transitions.pickup(current, at=now))
        logger.info("Parcel picked up for rent %s, locker %s released", rent.rent_id, rent.locker_id)
        return rent
