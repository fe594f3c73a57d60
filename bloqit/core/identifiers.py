from __future__ import annotations

import logging
from typing import Callable, TypeVar
from uuid import uuid4

from bloqit.core.errors import IdentifierCollisionError, UnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

IdFactory = Callable[[], str]


def new_id() -> str:
    return uuid4().hex


def insert_with_fresh_id(insert: Callable[[str], T], *, id_factory: IdFactory, max_attempts: int) -> T:
    """
    Call `insert` with a freshly generated identifier, regenerating it on collision.

    Raises UnavailableError once `max_attempts` identifiers have all collided.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = id_factory()
        try:
            return insert(candidate)
        except IdentifierCollisionError:
            logger.warning("Identifier collision on %r (attempt %d/%d)", candidate, attempt, max_attempts)

    raise UnavailableError(f"Could not allocate a unique identifier after {max_attempts} attempts")
