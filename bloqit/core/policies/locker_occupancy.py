from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bloqit.core.entities.locker import Locker
from bloqit.core.errors import ConflictError
from bloqit.core.policies.rent_transitions import RentTransition


@dataclass(frozen=True, slots=True)
class LockerUpdate:
    """
    Compare-and-set against one locker row: `changes` apply only while the row still
    holds every value in `expected`.
    """
    locker_id: str
    expected: dict[str, Any]
    changes: dict[str, Any]


def ensure_available(locker: Locker) -> None:
    if locker.is_occupied or locker.current_rent_id is not None:
        raise ConflictError(f"Locker {locker.locker_id!r} is already occupied")


def occupy(locker: Locker, rent_id: str) -> LockerUpdate:
    ensure_available(locker)
    return LockerUpdate(
        locker_id=locker.locker_id,
        expected={"is_occupied": False, "current_rent_id": None},
        changes={"is_occupied": True, "current_rent_id": rent_id},
    )


def release(locker: Locker, rent_id: str) -> LockerUpdate:
    if not locker.hosts(rent_id):
        raise ConflictError(f"Locker {locker.locker_id!r} does not host rent {rent_id!r}")
    return LockerUpdate(
        locker_id=locker.locker_id,
        expected={"current_rent_id": rent_id},
        changes={"is_occupied": False, "current_rent_id": None},
    )


def pair(locker: Locker, transition: RentTransition) -> LockerUpdate | None:
    """Locker-side effect of a rent transition, or None when occupancy is unchanged."""
    if transition.releases_locker:
        return release(locker, transition.rent_id)
    if transition.occupies_locker:
        return occupy(locker, transition.rent_id)
    return None
