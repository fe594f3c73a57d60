from __future__ import annotations

from sqlalchemy.orm import Session

from bloqit.core.entities.rent import Rent as CoreRent
from bloqit.core.use_cases.create_rent import CreateRentUseCase
from bloqit.core.use_cases.get_rent import GetRentsByLockerUseCase, GetRentUseCase
from bloqit.core.use_cases.record_dropoff import RecordDropoffUseCase
from bloqit.core.use_cases.record_pickup import RecordPickupUseCase
from bloqit.core.use_cases.update_rent_status import UpdateRentStatusUseCase
from bloqit.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqit.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqit.infrastructure.unit_of_work import SqlUnitOfWork
from bloqit.schemas.models import Rent, RentCreate, RentStatusUpdate


def _max_id_attempts() -> int:
    from bloqit.infrastructure.config import settings
    return settings.id_max_attempts


def _to_schema(rent: CoreRent) -> Rent:
    """
    Translate core Rent entity -> API schema Rent.
    """
    return Rent(
        id=rent.rent_id,
        locker_id=rent.locker_id,
        weight=rent.weight,
        size=rent.size.value,
        status=rent.status.value,
        created_at=rent.created_at,
        dropped_off_at=rent.dropped_off_at,
        picked_up_at=rent.picked_up_at,
    )


def _transition_kwargs(db: Session) -> dict:
    return {
        "rent_repo": RentRepositoryImpl(db),
        "locker_repo": LockerRepositoryImpl(db),
        "uow": SqlUnitOfWork(db),
    }


def create_rent_service(locker_id: str, body: RentCreate, db: Session) -> Rent:
    use_case = CreateRentUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rent_repo=RentRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
        max_id_attempts=_max_id_attempts(),
    )

    rent = use_case.execute(locker_id=locker_id, weight=body.weight, size=body.size.value)
    return _to_schema(rent)


def get_rent_service(rent_id: str, db: Session) -> Rent:
    use_case = GetRentUseCase(rent_repo=RentRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return _to_schema(use_case.execute(rent_id=rent_id))


def get_rents_by_locker_service(locker_id: str, db: Session) -> list[Rent]:
    use_case = GetRentsByLockerUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rent_repo=RentRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
    )
    return [_to_schema(rent) for rent in use_case.execute(locker_id=locker_id)]


def update_rent_status_service(rent_id: str, body: RentStatusUpdate, db: Session) -> Rent:
    use_case = UpdateRentStatusUseCase(**_transition_kwargs(db))
    return _to_schema(use_case.execute(rent_id=rent_id, status=body.status.value))


def record_dropoff_service(rent_id: str, db: Session) -> Rent:
    use_case = RecordDropoffUseCase(**_transition_kwargs(db))
    return _to_schema(use_case.execute(rent_id=rent_id))


def record_pickup_service(rent_id: str, db: Session) -> Rent:
    use_case = RecordPickupUseCase(**_transition_kwargs(db))
    return _to_schema(use_case.execute(rent_id=rent_id))
