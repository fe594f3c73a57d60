from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from bloqit.core.entities.locker import Locker


class LockerRepository(ABC):
    @abstractmethod
    def get(self, locker_id: str) -> Locker | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_bloq(self, bloq_id: str) -> list[Locker]:
        raise NotImplementedError

    @abstractmethod
    def add(self, locker: Locker) -> Locker:
        """Insert a new locker. Raises IdentifierCollisionError if locker_id is taken."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        locker_id: str,
        changes: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> Locker | None:
        """
        Apply `changes` to the locker in one conditional write.

        Returns the updated locker, or None when no row matches `locker_id` together with
        every value in `expected`.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, locker_id: str, *, expected: Mapping[str, Any] | None = None) -> bool:
        """Remove the locker if it still matches `expected`. Returns False when nothing was removed."""
        raise NotImplementedError
