from __future__ import annotations

from sqlalchemy.orm import Session

from bloqit.core.entities.bloq import Bloq as CoreBloq
from bloqit.core.entities.locker import Locker as CoreLocker
from bloqit.core.use_cases.create_locker import CreateLockerUseCase
from bloqit.core.use_cases.delete_locker import DeleteLockerUseCase
from bloqit.core.use_cases.get_locker import GetLockersByBloqUseCase, GetLockerUseCase
from bloqit.core.use_cases.get_locker_occupancy import GetLockerOccupancyUseCase
from bloqit.core.use_cases.manage_bloqs import (
    CreateBloqUseCase,
    GetBloqUseCase,
    ListBloqsUseCase,
    UpdateBloqUseCase,
)
from bloqit.core.use_cases.update_locker_status import UpdateLockerStatusUseCase
from bloqit.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqit.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqit.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqit.infrastructure.unit_of_work import SqlUnitOfWork
from bloqit.schemas.models import (
    Bloq,
    BloqCreate,
    BloqUpdate,
    Locker,
    LockerOccupancy,
    LockerStatusUpdate,
)


def _max_id_attempts() -> int:
    from bloqit.infrastructure.config import settings
    return settings.id_max_attempts


def _bloq_schema(bloq: CoreBloq) -> Bloq:
    return Bloq(
        id=bloq.bloq_id,
        title=bloq.title,
        address=bloq.address,
        created_at=bloq.created_at,
        updated_at=bloq.updated_at,
    )


def _locker_schema(locker: CoreLocker) -> Locker:
    return Locker(
        id=locker.locker_id,
        bloq_id=locker.bloq_id,
        status=locker.status.value,
        is_occupied=locker.is_occupied,
    )


# -----------------------------
# Bloqs
# -----------------------------
def create_bloq_service(body: BloqCreate, db: Session) -> Bloq:
    use_case = CreateBloqUseCase(
        bloq_repo=BloqRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
        max_id_attempts=_max_id_attempts(),
    )
    return _bloq_schema(use_case.execute(title=body.title, address=body.address))


def list_bloqs_service(db: Session) -> list[Bloq]:
    use_case = ListBloqsUseCase(bloq_repo=BloqRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return [_bloq_schema(bloq) for bloq in use_case.execute()]


def get_bloq_service(bloq_id: str, db: Session) -> Bloq:
    use_case = GetBloqUseCase(bloq_repo=BloqRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return _bloq_schema(use_case.execute(bloq_id=bloq_id))


def update_bloq_service(bloq_id: str, body: BloqUpdate, db: Session) -> Bloq:
    use_case = UpdateBloqUseCase(bloq_repo=BloqRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return _bloq_schema(use_case.execute(bloq_id=bloq_id, title=body.title, address=body.address))


# -----------------------------
# Lockers
# -----------------------------
def create_locker_service(bloq_id: str, db: Session) -> Locker:
    use_case = CreateLockerUseCase(
        bloq_repo=BloqRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
        max_id_attempts=_max_id_attempts(),
    )
    return _locker_schema(use_case.execute(bloq_id=bloq_id))


def get_locker_service(locker_id: str, db: Session) -> Locker:
    use_case = GetLockerUseCase(locker_repo=LockerRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return _locker_schema(use_case.execute(locker_id=locker_id))


def get_lockers_by_bloq_service(bloq_id: str, db: Session) -> list[Locker]:
    use_case = GetLockersByBloqUseCase(
        bloq_repo=BloqRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
    )
    return [_locker_schema(locker) for locker in use_case.execute(bloq_id=bloq_id)]


def update_locker_status_service(locker_id: str, body: LockerStatusUpdate, db: Session) -> Locker:
    use_case = UpdateLockerStatusUseCase(locker_repo=LockerRepositoryImpl(db), uow=SqlUnitOfWork(db))
    return _locker_schema(use_case.execute(locker_id=locker_id, status=body.status.value))


def delete_locker_service(locker_id: str, db: Session) -> None:
    use_case = DeleteLockerUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rent_repo=RentRepositoryImpl(db),
        uow=SqlUnitOfWork(db),
    )
    use_case.execute(locker_id=locker_id)


def get_locker_occupancy_service(locker_id: str, db: Session) -> LockerOccupancy:
    use_case = GetLockerOccupancyUseCase(locker_repo=LockerRepositoryImpl(db), uow=SqlUnitOfWork(db))

    dto = use_case.execute(locker_id=locker_id)

    return LockerOccupancy(
        locker_id=dto.locker_id,
        is_occupied=dto.is_occupied,
        current_rent_id=dto.current_rent_id,
    )
