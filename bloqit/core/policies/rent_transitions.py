from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bloqit.core.entities.rent import Rent, RentStatus
from bloqit.core.errors import InvalidTransitionError

STATUS_ORDER: tuple[RentStatus, ...] = (
    RentStatus.CREATED,
    RentStatus.WAITING_DROPOFF,
    RentStatus.WAITING_PICKUP,
    RentStatus.DELIVERED,
)

# Edges reachable through the dropoff/pickup operations. CREATED -> WAITING_DROPOFF
# only happens through the administrative status update.
STRICT_TRANSITIONS: dict[RentStatus, RentStatus] = {
    RentStatus.WAITING_DROPOFF: RentStatus.WAITING_PICKUP,
    RentStatus.WAITING_PICKUP: RentStatus.DELIVERED,
}


@dataclass(frozen=True, slots=True)
class RentTransition:
    """
    A validated move of one rent from `source` to `target`.

    `changes` holds the column values to write; the write must be conditional on the
    rent still being in `source`.
    """
    rent_id: str
    source: RentStatus
    target: RentStatus
    changes: dict[str, Any] = field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        return self.source is self.target and not self.changes

    @property
    def releases_locker(self) -> bool:
        return self.source.is_active and not self.target.is_active

    @property
    def occupies_locker(self) -> bool:
        return not self.source.is_active and self.target.is_active


def rank(status: RentStatus) -> int:
    return STATUS_ORDER.index(status)


def _strict(rent: Rent, target: RentStatus) -> None:
    if STRICT_TRANSITIONS.get(rent.status) is not target:
        raise InvalidTransitionError(rent.rent_id, rent.status, target)


def dropoff(rent: Rent, *, at: datetime) -> RentTransition:
    _strict(rent, RentStatus.WAITING_PICKUP)
    return RentTransition(
        rent_id=rent.rent_id,
        source=rent.status,
        target=RentStatus.WAITING_PICKUP,
        changes={"status": RentStatus.WAITING_PICKUP, "dropped_off_at": at},
    )


def pickup(rent: Rent, *, at: datetime) -> RentTransition:
    _strict(rent, RentStatus.DELIVERED)
    return RentTransition(
        rent_id=rent.rent_id,
        source=rent.status,
        target=RentStatus.DELIVERED,
        changes={"status": RentStatus.DELIVERED, "picked_up_at": at},
    )


def override(rent: Rent, target: RentStatus, *, at: datetime) -> RentTransition:
    """
    Administrative status change. Any enum member is accepted, forwards or backwards.

    Timestamps already recorded are kept; entering WAITING_PICKUP or DELIVERED fills in
    the ones that were skipped so they never read as unset past their status.
    """
    if target is rent.status:
        return RentTransition(rent_id=rent.rent_id, source=rent.status, target=target)

    changes: dict[str, Any] = {"status": target}
    if rank(target) >= rank(RentStatus.WAITING_PICKUP) and rent.dropped_off_at is None:
        changes["dropped_off_at"] = at
    if target is RentStatus.DELIVERED and rent.picked_up_at is None:
        changes["picked_up_at"] = at

    return RentTransition(rent_id=rent.rent_id, source=rent.status, target=target, changes=changes)
