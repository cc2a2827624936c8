"""Domain-level exceptions.

All lifecycle and allocation failures are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.

Only ``ConcurrencyConflictError`` is safe to retry blindly: the others
describe the current state of the world and will fail again.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    retryable = False


class ValidationError(DomainException):
    """Malformed input, e.g. an unknown status or a negative capacity."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidTransitionError(DomainException):
    """The requested status change is not an edge of the transition table."""

    def __init__(self, current, target, valid_next_states) -> None:
        self.current = current
        self.target = target
        self.valid_next_states = tuple(valid_next_states)
        allowed = ", ".join(s.value for s in self.valid_next_states) or "none"
        super().__init__(
            f"Cannot move asset from {current.value} to {target.value} "
            f"(valid next states: {allowed})"
        )


class DuplicateAssignmentError(DomainException):
    """The member already holds a seat in this pool."""


class CapacityExceededError(DomainException):
    """Every seat in the pool is taken."""


class ConcurrencyConflictError(DomainException):
    """Another writer changed the record between our read and our write."""

    retryable = True


class OperationTimeoutError(DomainException):
    """The caller's deadline passed before anything was committed."""
