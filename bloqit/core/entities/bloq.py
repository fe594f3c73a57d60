from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Bloq:
    bloq_id: str
    title: str
    address: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
