from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RentSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class RentStatus(str, Enum):
    CREATED = "CREATED"
    WAITING_DROPOFF = "WAITING_DROPOFF"
    WAITING_PICKUP = "WAITING_PICKUP"
    DELIVERED = "DELIVERED"

    @property
    def is_active(self) -> bool:
        """An active rent keeps its locker occupied."""
        return self is not RentStatus.DELIVERED


@dataclass(slots=True)
class Rent:
    rent_id: str
    locker_id: str
    weight: float
    size: RentSize
    status: RentStatus = RentStatus.CREATED
    created_at: datetime | None = None
    dropped_off_at: datetime | None = None
    picked_up_at: datetime | None = None
