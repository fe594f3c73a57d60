from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import pytest
from sqlalchemy.orm import Session

from bloqit.core.entities.bloq import Bloq
from bloqit.core.entities.locker import Locker
from bloqit.infrastructure.database import Database
from bloqit.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqit.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqit.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqit.infrastructure.unit_of_work import SqlUnitOfWork


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database("sqlite+pysqlite:///:memory:")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def session(database: Database) -> Iterator[Session]:
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def bloq_repo(session: Session) -> BloqRepositoryImpl:
    return BloqRepositoryImpl(session)


@pytest.fixture()
def locker_repo(session: Session) -> LockerRepositoryImpl:
    return LockerRepositoryImpl(session)


@pytest.fixture()
def rent_repo(session: Session) -> RentRepositoryImpl:
    return RentRepositoryImpl(session)


@pytest.fixture()
def uow(session: Session) -> SqlUnitOfWork:
    return SqlUnitOfWork(session)


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    """A clock that moves forward one second per reading."""
    start = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    readings = iter(range(10_000))

    def _now() -> datetime:
        return start + timedelta(seconds=next(readings))

    return _now


@pytest.fixture()
def make_locker(bloq_repo: BloqRepositoryImpl, locker_repo: LockerRepositoryImpl, uow: SqlUnitOfWork):
    """Insert a bloq (once) plus a fresh CLOSED, unoccupied locker and return the locker."""
    counter = iter(range(1, 1_000))

    def _make(locker_id: str | None = None) -> Locker:
        with uow.transaction():
            if bloq_repo.get("B1") is None:
                bloq_repo.add(Bloq(bloq_id="B1", title="Riod Eixample", address="Pg. de Gràcia 74, Barcelona"))
            return locker_repo.add(Locker(locker_id=locker_id or f"L{next(counter)}", bloq_id="B1"))

    return _make
