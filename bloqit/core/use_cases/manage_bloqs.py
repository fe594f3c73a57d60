from __future__ import annotations

import logging

from bloqit.core.clock import Clock, utcnow
from bloqit.core.entities.bloq import Bloq
from bloqit.core.errors import NotFoundError, ValidationError
from bloqit.core.identifiers import IdFactory, insert_with_fresh_id, new_id
from bloqit.core.repositories.bloq_repository import BloqRepository
from bloqit.core.repositories.unit_of_work import UnitOfWork
from bloqit.core.validation import require_id

logger = logging.getLogger(__name__)


def _require_text(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value.strip()


class CreateBloqUseCase:
    def __init__(
        self,
        *,
        bloq_repo: BloqRepository,
        uow: UnitOfWork,
        id_factory: IdFactory = new_id,
        max_id_attempts: int = 3,
        clock: Clock = utcnow,
    ) -> None:
        self._bloq_repo = bloq_repo
        self._uow = uow
        self._id_factory = id_factory
        self._max_id_attempts = max_id_attempts
        self._clock = clock

    def execute(self, *, title: str, address: str) -> Bloq:
        title = _require_text(title, "title")
        address = _require_text(address, "address")
        now = self._clock()

        with self._uow.transaction():
            bloq = insert_with_fresh_id(
                lambda bloq_id: self._bloq_repo.add(
                    Bloq(bloq_id=bloq_id, title=title, address=address, created_at=now, updated_at=now)
                ),
                id_factory=self._id_factory,
                max_attempts=self._max_id_attempts,
            )

        logger.info("Bloq %s created", bloq.bloq_id)
        return bloq


class GetBloqUseCase:
    def __init__(self, *, bloq_repo: BloqRepository, uow: UnitOfWork) -> None:
        self._bloq_repo = bloq_repo
        self._uow = uow

    def execute(self, *, bloq_id: str) -> Bloq:
        bloq_id = require_id(bloq_id, "bloq_id")
        with self._uow.transaction():
            bloq = self._bloq_repo.get(bloq_id)
        if bloq is None:
            raise NotFoundError("Bloq not found")
        return bloq


class ListBloqsUseCase:
    def __init__(self, *, bloq_repo: BloqRepository, uow: UnitOfWork) -> None:
        self._bloq_repo = bloq_repo
        self._uow = uow

    def execute(self) -> list[Bloq]:
        with self._uow.transaction():
            return self._bloq_repo.list()


class UpdateBloqUseCase:
    """Only title and address are editable; omitted fields are left as they are."""

    def __init__(self, *, bloq_repo: BloqRepository, uow: UnitOfWork, clock: Clock = utcnow) -> None:
        self._bloq_repo = bloq_repo
        self._uow = uow
        self._clock = clock

    def execute(self, *, bloq_id: str, title: str | None = None, address: str | None = None) -> Bloq:
        bloq_id = require_id(bloq_id, "bloq_id")
        changes: dict[str, object] = {}
        if title is not None:
            changes["title"] = _require_text(title, "title")
        if address is not None:
            changes["address"] = _require_text(address, "address")

        with self._uow.transaction():
            if not changes:
                bloq = self._bloq_repo.get(bloq_id)
            else:
                changes["updated_at"] = self._clock()
                bloq = self._bloq_repo.update(bloq_id, changes)
        if bloq is None:
            raise NotFoundError("Bloq not found")
        return bloq
