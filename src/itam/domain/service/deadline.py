"""Caller-supplied time budgets for store operations."""

from __future__ import annotations

import time

from itam.domain.exceptions import OperationTimeoutError, ValidationError


class Deadline:
    """Checked before every compare-and-swap attempt.

    An operation that runs out of time raises before writing, so a timeout
    never leaves a half-applied change behind.
    """

    def __init__(self, timeout: float | None, clock=time.monotonic) -> None:
        if timeout is not None and timeout < 0:
            raise ValidationError("Timeout cannot be negative")
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout

    def check(self, operation: str) -> None:
        if self._expires_at is not None and self._clock() >= self._expires_at:
            raise OperationTimeoutError(f"{operation} timed out before committing")
