from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from bloqit.core.errors import UnavailableError
from bloqit.core.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """Commits the session at the end of the block, rolls it back on any error."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except (OperationalError, PoolTimeoutError) as e:
            self._db.rollback()
            logger.error("Storage unavailable, transaction rolled back: %s", e)
            raise UnavailableError("Storage is temporarily unavailable, retry the request") from e
        except IntegrityError as e:
            # a concurrent writer inserted the same key after our existence check
            self._db.rollback()
            logger.warning("Write lost to a concurrent insert, transaction rolled back: %s", e.orig)
            raise UnavailableError("Concurrent write detected, retry the request") from e
        except Exception:
            self._db.rollback()
            raise
