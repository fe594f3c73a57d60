from __future__ import annotations

from bloqit.core.entities.locker import Locker
from bloqit.core.errors import NotFoundError
from bloqit.core.repositories.bloq_repository import BloqRepository
from bloqit.core.repositories.locker_repository import LockerRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id


class GetLockerUseCase:
    def __init__(self, *, locker_repo: LockerRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._uow = uow

    def execute(self, *, locker_id: str) -> Locker:
        locker_id = require_id(locker_id, "locker_id")
        with self._uow.transaction():
            locker: Locker | None = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")
        return locker


class GetLockersByBloqUseCase:
    def __init__(self, *, bloq_repo: BloqRepository, locker_repo: LockerRepository, uow: UnitOfWork) -> None:
        self._bloq_repo = bloq_repo
        self._locker_repo = locker_repo
        self._uow = uow

    def execute(self, *, bloq_id: str) -> list[Locker]:
        bloq_id = require_id(bloq_id, "bloq_id")
        with self._uow.transaction():
            if self._bloq_repo.get(bloq_id) is None:
                raise NotFoundError("Bloq not found")
            return self._locker_repo.list_by_bloq(bloq_id)
