from __future__ import annotations

import math
from enum import Enum
from typing import TypeVar

from bloqit.core.errors import ValidationError

E = TypeVar("E", bound=Enum)


def require_id(value: object, name: str) -> str:
    """Raises ValidationError if value is not a non-empty string"""

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value


def require_enum(enum_cls: type[E], value: object, name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{name} must be one of: {allowed} (got {value!r})") from None


def require_weight(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("weight must be a number")
    weight = float(value)
    if not math.isfinite(weight) or weight <= 0:
        raise ValidationError(f"weight must be a positive number of kilograms (got {value!r})")
    return weight
