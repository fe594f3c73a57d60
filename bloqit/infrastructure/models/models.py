from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from bloqit.core.entities.locker import LockerStatus
from bloqit.core.entities.rent import RentSize, RentStatus
from bloqit.infrastructure.database import Base


class BloqModel(Base):
    __tablename__ = "bloqs"

    bloq_id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class LockerModel(Base):
    __tablename__ = "lockers"

    locker_id: Mapped[str] = mapped_column(String, primary_key=True)
    bloq_id: Mapped[str] = mapped_column(ForeignKey("bloqs.bloq_id"), nullable=False, index=True)
    status: Mapped[LockerStatus] = mapped_column(Enum(LockerStatus), nullable=False, default=LockerStatus.CLOSED)
    is_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Rent currently hosted by this locker; null while the locker is free.
    current_rent_id: Mapped[str | None] = mapped_column(String, nullable=True, unique=True)


class RentModel(Base):
    __tablename__ = "rents"

    rent_id: Mapped[str] = mapped_column(String, primary_key=True)
    locker_id: Mapped[str] = mapped_column(ForeignKey("lockers.locker_id"), nullable=False, index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    size: Mapped[RentSize] = mapped_column(Enum(RentSize), nullable=False)
    status: Mapped[RentStatus] = mapped_column(Enum(RentStatus), nullable=False, default=RentStatus.CREATED)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    dropped_off_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    picked_up_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
