from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from bloqit.core.entities.rent import Rent


class RentRepository(ABC):
    @abstractmethod
    def get(self, rent_id: str) -> Rent | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_locker(self, locker_id: str) -> list[Rent]:
        """All rents ever hosted by the locker, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def add(self, rent: Rent) -> Rent:
        """Insert a new rent. Raises IdentifierCollisionError if rent_id is taken."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        rent_id: str,
        changes: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> Rent | None:
        """Conditional write, same contract as LockerRepository.update."""
        raise NotImplementedError
