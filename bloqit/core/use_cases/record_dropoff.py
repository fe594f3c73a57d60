from __future__ import annotations

import logging

from bloqit.core.entities.rent import Rent
from bloqit.core.policies import rent_transitions
from bloqit.core.use_cases.transition_rent import TransitionRentUseCase

logger = logging.getLogger(__name__)


class RecordDropoffUseCase(TransitionRentUseCase):
    """WAITING_DROPOFF -> WAITING_PICKUP. The locker stays occupied."""

    def execute(self, *, rent_id: str) -> Rent:
        _, rent = self._transition(rent_id, lambda current, now: rent_transitions.dropoff(current, at=now))
        logger.info("Parcel dropped off for rent %s in locker %s", rent.rent_id, rent.locker_id)
        return rent
