from __future__ import annotations

from datetime import datetime, timezone

import pytest

from bloqit.core.entities.locker import Locker
from bloqit.core.entities.rent import Rent, RentSize, RentStatus
from bloqit.core.errors import ConflictError, InvalidTransitionError
from bloqit.core.policies import locker_occupancy, rent_transitions

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _rent(status: RentStatus, **kwargs) -> Rent:
    return Rent(rent_id="R1", locker_id="L1", weight=2.5, size=RentSize.M, status=status, **kwargs)


def test_dropoff_from_waiting_dropoff_moves_to_waiting_pickup_and_stamps_time() -> None:
    transition = rent_transitions.dropoff(_rent(RentStatus.WAITING_DROPOFF), at=NOW)

    assert transition.source is RentStatus.WAITING_DROPOFF
    assert transition.target is RentStatus.WAITING_PICKUP
    assert transition.changes == {"status": RentStatus.WAITING_PICKUP, "dropped_off_at": NOW}
    assert not transition.releases_locker
    assert not transition.occupies_locker


@pytest.mark.parametrize("status", [RentStatus.CREATED, RentStatus.WAITING_PICKUP, RentStatus.DELIVERED])
def test_dropoff_from_any_other_status_is_an_invalid_transition(status: RentStatus) -> None:
    with pytest.raises(InvalidTransitionError) as exc_info:
        rent_transitions.dropoff(_rent(status), at=NOW)

    assert exc_info.value.current is status
    assert exc_info.value.target is RentStatus.WAITING_PICKUP
    assert isinstance(exc_info.value, ConflictError)


def test_pickup_from_waiting_pickup_delivers_and_releases_locker() -> None:
    transition = rent_transitions.pickup(_rent(RentStatus.WAITING_PICKUP, dropped_off_at=NOW), at=NOW)

    assert transition.target is RentStatus.DELIVERED
    assert transition.changes == {"status": RentStatus.DELIVERED, "picked_up_at": NOW}
    assert transition.releases_locker


@pytest.mark.parametrize("status", [RentStatus.CREATED, RentStatus.WAITING_DROPOFF, RentStatus.DELIVERED])
def test_pickup_from_any_other_status_is_an_invalid_transition(status: RentStatus) -> None:
    with pytest.raises(InvalidTransitionError):
        rent_transitions.pickup(_rent(status), at=NOW)


def test_override_to_same_status_is_a_noop() -> None:
    transition = rent_transitions.override(_rent(RentStatus.CREATED), RentStatus.CREATED, at=NOW)
    assert transition.is_noop


def test_override_created_to_waiting_dropoff_touches_only_status() -> None:
    transition = rent_transitions.override(_rent(RentStatus.CREATED), RentStatus.WAITING_DROPOFF, at=NOW)
    assert transition.changes == {"status": RentStatus.WAITING_DROPOFF}
    assert not transition.releases_locker


def test_override_jump_to_delivered_fills_both_timestamps() -> None:
    transition = rent_transitions.override(_rent(RentStatus.CREATED), RentStatus.DELIVERED, at=NOW)

    assert transition.changes == {
        "status": RentStatus.DELIVERED,
        "dropped_off_at": NOW,
        "picked_up_at": NOW,
    }
    assert transition.releases_locker


def test_override_backwards_keeps_recorded_timestamps_and_reoccupies() -> None:
    earlier = datetime(2024, 2, 1, tzinfo=timezone.utc)
    rent = _rent(RentStatus.DELIVERED, dropped_off_at=earlier, picked_up_at=earlier)

    transition = rent_transitions.override(rent, RentStatus.WAITING_PICKUP, at=NOW)

    assert transition.changes == {"status": RentStatus.WAITING_PICKUP}
    assert transition.occupies_locker


def test_status_order_is_fixed() -> None:
    ranks = [rent_transitions.rank(s) for s in rent_transitions.STATUS_ORDER]
    assert ranks == sorted(ranks)
    assert rent_transitions.STATUS_ORDER[0] is RentStatus.CREATED
    assert rent_transitions.STATUS_ORDER[-1] is RentStatus.DELIVERED


def test_occupy_free_locker_is_conditional_on_it_staying_free() -> None:
    update = locker_occupancy.occupy(Locker(locker_id="L1", bloq_id="B1"), "R1")

    assert update.expected == {"is_occupied": False, "current_rent_id": None}
    assert update.changes == {"is_occupied": True, "current_rent_id": "R1"}


def test_occupy_occupied_locker_conflicts() -> None:
    locker = Locker(locker_id="L1", bloq_id="B1", is_occupied=True, current_rent_id="R0")
    with pytest.raises(ConflictError):
        locker_occupancy.occupy(locker, "R1")


def test_release_requires_locker_to_host_that_rent() -> None:
    locker = Locker(locker_id="L1", bloq_id="B1", is_occupied=True, current_rent_id="R0")

    with pytest.raises(ConflictError):
        locker_occupancy.release(locker, "R1")

    update = locker_occupancy.release(locker, "R0")
    assert update.expected == {"current_rent_id": "R0"}
    assert update.changes == {"is_occupied": False, "current_rent_id": None}


def test_dropoff_has_no_locker_effect() -> None:
    locker = Locker(locker_id="L1", bloq_id="B1", is_occupied=True, current_rent_id="R1")
    transition = rent_transitions.dropoff(_rent(RentStatus.WAITING_DROPOFF), at=NOW)

    assert locker_occupancy.pair(locker, transition) is None
