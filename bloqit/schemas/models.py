from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class LockerStatus(Enum):
    OPEN = 'OPEN'
    CLOSED = 'CLOSED'


class Size(Enum):
    XS = 'XS'
    S = 'S'
    M = 'M'
    L = 'L'
    XL = 'XL'


class RentStatus(Enum):
    CREATED = 'CREATED'
    WAITING_DROPOFF = 'WAITING_DROPOFF'
    WAITING_PICKUP = 'WAITING_PICKUP'
    DELIVERED = 'DELIVERED'


class BloqCreate(BaseModel):
    title: str
    address: str


class BloqUpdate(BaseModel):
    title: str | None = None
    address: str | None = None


class Bloq(BaseModel):
    id: str
    title: str
    address: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LockerStatusUpdate(BaseModel):
    status: LockerStatus


class Locker(BaseModel):
    id: str
    bloq_id: str
    status: LockerStatus
    is_occupied: bool


class LockerOccupancy(BaseModel):
    locker_id: str
    is_occupied: bool
    current_rent_id: str | None


class RentCreate(BaseModel):
    # bounds are enforced by the core so they map to the same error kind everywhere
    weight: float
    size: Size


class RentStatusUpdate(BaseModel):
    status: RentStatus


class Rent(BaseModel):
    id: str
    locker_id: str
    weight: float
    size: Size
    status: RentStatus
    created_at: datetime | None = None
    dropped_off_at: datetime | None = None
    picked_up_at: datetime | None = None
