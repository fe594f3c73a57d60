from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"
    UNAVAILABLE = "UNAVAILABLE"


class BloqitError(Exception):
    """
    Base class for every error the core surfaces to its callers.

    The boundary layer branches on `kind`, never on the message text.
    """
    kind: ErrorKind


class ValidationError(BloqitError):
    """Malformed input, rejected before any persisted state is read."""
    kind = ErrorKind.VALIDATION


class NotFoundError(BloqitError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(BloqitError):
    """The entity exists but its state does not allow the requested operation."""
    kind = ErrorKind.CONFLICT


class InvalidTransitionError(ConflictError):
    def __init__(self, rent_id: str, current: Enum, target: Enum) -> None:
        self.rent_id = rent_id
        self.current = current
        self.target = target
        super().__init__(
            f"Rent {rent_id!r} cannot move from {current.value!r} to {target.value!r}"
        )


class UnavailableError(BloqitError):
    """Storage could not complete the operation; retrying the whole call is safe."""
    kind = ErrorKind.UNAVAILABLE


class IdentifierCollisionError(Exception):
    """Raised by a repository when a generated identifier is already taken."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"Identifier already in use: {entity_id!r}")
