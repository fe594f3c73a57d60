from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LockerStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(slots=True)
class Locker:
    locker_id: str
    bloq_id: str
    status: LockerStatus = LockerStatus.CLOSED
    is_occupied: bool = False
    current_rent_id: str | None = None

    def hosts(self, rent_id: str) -> bool:
        return self.current_rent_id == rent_id
