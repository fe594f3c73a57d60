from __future__ import annotations

import pytest

from bloqit.core.entities.locker import LockerStatus
from bloqit.core.errors import ConflictError, NotFoundError, ValidationError
from bloqit.core.use_cases.create_locker import CreateLockerUseCase
from bloqit.core.use_cases.create_rent import CreateRentUseCase
from bloqit.core.use_cases.delete_locker import DeleteLockerUseCase
from bloqit.core.use_cases.get_locker import GetLockersByBloqUseCase, GetLockerUseCase
from bloqit.core.use_cases.manage_bloqs import CreateBloqUseCase, GetBloqUseCase, UpdateBloqUseCase
from bloqit.core.use_cases.update_rent_status import UpdateRentStatusUseCase
from bloqit.core.use_cases.update_locker_status import UpdateLockerStatusUseCase


def test_create_bloq_then_lockers(bloq_repo, locker_repo, uow, clock) -> None:
    bloq = CreateBloqUseCase(bloq_repo=bloq_repo, uow=uow, clock=clock).execute(
        title="  Luitton Vouis Champs Elysées ",
        address="101 Av. des Champs-Élysées, Paris",
    )
    assert bloq.title == "Luitton Vouis Champs Elysées"

    create_locker = CreateLockerUseCase(bloq_repo=bloq_repo, locker_repo=locker_repo, uow=uow)
    first = create_locker.execute(bloq_id=bloq.bloq_id)
    second = create_locker.execute(bloq_id=bloq.bloq_id)

    assert first.status is LockerStatus.CLOSED
    assert first.is_occupied is False
    listed = GetLockersByBloqUseCase(bloq_repo=bloq_repo, locker_repo=locker_repo, uow=uow).execute(
        bloq_id=bloq.bloq_id
    )
    assert {locker.locker_id for locker in listed} == {first.locker_id, second.locker_id}


def test_create_bloq_requires_title_and_address(bloq_repo, uow) -> None:
    with pytest.raises(ValidationError):
        CreateBloqUseCase(bloq_repo=bloq_repo, uow=uow).execute(title="", address="somewhere")


def test_create_locker_in_missing_bloq_is_not_found(bloq_repo, locker_repo, uow) -> None:
    with pytest.raises(NotFoundError):
        CreateLockerUseCase(bloq_repo=bloq_repo, locker_repo=locker_repo, uow=uow).execute(bloq_id="nope")


def test_update_bloq_changes_only_given_fields(bloq_repo, uow, clock) -> None:
    bloq = CreateBloqUseCase(bloq_repo=bloq_repo, uow=uow, clock=clock).execute(title="Bloq", address="Old")

    updated = UpdateBloqUseCase(bloq_repo=bloq_repo, uow=uow, clock=clock).execute(
        bloq_id=bloq.bloq_id, address="New"
    )

    assert updated.title == "Bloq"
    assert updated.address == "New"
    assert updated.updated_at > bloq.updated_at
    assert GetBloqUseCase(bloq_repo=bloq_repo, uow=uow).execute(bloq_id=bloq.bloq_id) == updated


def test_update_missing_bloq_is_not_found(bloq_repo, uow) -> None:
    with pytest.raises(NotFoundError):
        UpdateBloqUseCase(bloq_repo=bloq_repo, uow=uow).execute(bloq_id="nope", title="x")


def test_update_locker_status(make_locker, locker_repo, uow) -> None:
    make_locker("L1")
    use_case = UpdateLockerStatusUseCase(locker_repo=locker_repo, uow=uow)

    assert use_case.execute(locker_id="L1", status="OPEN").status is LockerStatus.OPEN
    assert GetLockerUseCase(locker_repo=locker_repo, uow=uow).execute(locker_id="L1").status is LockerStatus.OPEN

    with pytest.raises(ValidationError):
        use_case.execute(locker_id="L1", status="AJAR")
    with pytest.raises(NotFoundError):
        use_case.execute(locker_id="nope", status="CLOSED")


def test_delete_free_locker(make_locker, locker_repo, rent_repo, uow) -> None:
    make_locker("L1")

    DeleteLockerUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow).execute(locker_id="L1")

    assert locker_repo.get("L1") is None
    with pytest.raises(NotFoundError):
        DeleteLockerUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow).execute(locker_id="L1")


def test_delete_occupied_locker_conflicts(make_locker, locker_repo, rent_repo, uow, clock) -> None:
    make_locker("L1")
    rent = CreateRentUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow, clock=clock).execute(
        locker_id="L1", weight=1.0, size="S"
    )

    with pytest.raises(ConflictError):
        DeleteLockerUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow).execute(locker_id="L1")

    assert locker_repo.get("L1").current_rent_id == rent.rent_id


def test_delete_locker_with_rent_history_conflicts(make_locker, locker_repo, rent_repo, uow, clock) -> None:
    make_locker("L1")
    rent = CreateRentUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow, clock=clock).execute(
        locker_id="L1", weight=1.0, size="S"
    )
    UpdateRentStatusUseCase(rent_repo=rent_repo, locker_repo=locker_repo, uow=uow, clock=clock).execute(
        rent_id=rent.rent_id, status="DELIVERED"
    )
    assert locker_repo.get("L1").is_occupied is False

    with pytest.raises(ConflictError):
        DeleteLockerUseCase(locker_repo=locker_repo, rent_repo=rent_repo, uow=uow).execute(locker_id="L1")

    assert locker_repo.get("L1") is not None
    assert [r.rent_id for r in rent_repo.list_by_locker("L1")] == [rent.rent_id]


def test_locker_delete_only_matches_a_free_locker(make_locker, locker_repo, uow) -> None:
    make_locker("L1")

    with uow.transaction():
        locker_repo.update("L1", {"is_occupied": True, "current_rent_id": "R1"})
        removed = locker_repo.delete("L1", expected={"is_occupied": False, "current_rent_id": None})

    assert removed is False
    assert locker_repo.get("L1").current_rent_id == "R1"
