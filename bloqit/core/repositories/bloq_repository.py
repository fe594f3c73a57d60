from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from bloqit.core.entities.bloq import Bloq


class BloqRepository(ABC):
    @abstractmethod
    def get(self, bloq_id: str) -> Bloq | None:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> list[Bloq]:
        raise NotImplementedError

    @abstractmethod
    def add(self, bloq: Bloq) -> Bloq:
        raise NotImplementedError

    @abstractmethod
    def update(self, bloq_id: str, changes: Mapping[str, Any]) -> Bloq | None:
        raise NotImplementedError
