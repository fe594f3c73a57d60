from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from sqlalchemy.orm import Session

from bloqit.core.clock import utcnow
from bloqit.core.entities.bloq import Bloq
from bloqit.core.entities.locker import Locker, LockerStatus
from bloqit.core.errors import ValidationError
from bloqit.core.identifiers import new_id
from bloqit.core.validation import require_enum
from bloqit.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqit.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqit.infrastructure.unit_of_work import SqlUnitOfWork

logger = logging.getLogger(__name__)


def load_seed_file(path: Path) -> list[dict[str, Any]]:
    """
    Read a seed document of the form

        bloqs:
          - id: optional
            title: ...
            address: ...
            lockers:
              - id: optional
                status: OPEN | CLOSED   (default CLOSED)
    """
    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f) or {}

    bloqs = document.get("bloqs") if isinstance(document, dict) else None
    if not isinstance(bloqs, list):
        raise ValidationError(f"Seed file {path} must contain a 'bloqs' list")
    return bloqs


def _require_fields(entry: Any, *fields: str) -> None:
    if not isinstance(entry, dict):
        raise ValidationError(f"Seed bloq entries must be mappings (got {entry!r})")
    for field in fields:
        value = entry.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Seed bloq entry is missing '{field}': {entry!r}")


def seed_database(db: Session, path: Path) -> int:
    """
    Insert the bloqs and lockers described in `path` unless the database already holds
    bloqs. Seeded lockers always start unoccupied. Returns the number of bloqs inserted.
    """
    bloq_repo = BloqRepositoryImpl(db)
    locker_repo = LockerRepositoryImpl(db)
    uow = SqlUnitOfWork(db)

    entries = load_seed_file(path)
    now = utcnow()

    with uow.transaction():
        if bloq_repo.list():
            logger.info("Database already seeded, skipping %s", path)
            return 0

        for entry in entries:
            _require_fields(entry, "title", "address")
            bloq = bloq_repo.add(
                Bloq(
                    bloq_id=str(entry.get("id") or new_id()),
                    title=entry["title"],
                    address=entry["address"],
                    created_at=now,
                    updated_at=now,
                )
            )
            for locker_entry in entry.get("lockers") or []:
                if not isinstance(locker_entry, dict):
                    raise ValidationError(f"Seed locker entries must be mappings (got {locker_entry!r})")
                locker_repo.add(
                    Locker(
                        locker_id=str(locker_entry.get("id") or new_id()),
                        bloq_id=bloq.bloq_id,
                        status=require_enum(LockerStatus, locker_entry.get("status", "CLOSED"), "status"),
                    )
                )

    logger.info("Seeded %d bloqs from %s", len(entries), path)
    return len(entries)
