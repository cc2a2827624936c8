"""Domain service: Seat Allocator.

Admission control for any ``SeatPool`` store (license seats today).
The capacity check and the mutation are one compare-and-swap: a write
only lands if the pool is exactly the snapshot the check was made
against.  When the swap loses, the allocator re-reads, re-checks from
scratch and tries again, giving up with ``ConcurrencyConflictError``
after ``max_attempts``.

Because every attempt re-validates against fresh state, a retry can
turn into ``CapacityExceededError`` or ``DuplicateAssignmentError`` if
the competing writer took the last seat or assigned the same member.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from itam.domain.exceptions import (
    CapacityExceededError,
    ConcurrencyConflictError,
    DuplicateAssignmentError,
    EntityNotFoundError,
    ValidationError,
)
from itam.domain.model.events import SeatAssigned, SeatUnassigned
from itam.domain.model.seat_pool import SeatPool, SeatUtilization, UtilizationSummary
from itam.domain.repository.invariant_store import InvariantStore
from itam.domain.service.deadline import Deadline
from itam.domain.service.event_publisher import EventPublisher

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SeatAllocator:

    def __init__(
        self,
        pool_repo: InvariantStore,
        events: EventPublisher | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        pool_label: str = "License",
        clock=_utcnow,
    ) -> None:
        if max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1")
        self._pool_repo = pool_repo
        self._events = events or EventPublisher()
        self._max_attempts = max_attempts
        self._pool_label = pool_label
        self._clock = clock

    def assign(
        self,
        pool_id: str,
        member_id: str,
        actor: str | None = None,
        reason: str | None = None,
        timeout: float | None = None,
    ) -> SeatUtilization:
        """Give *member_id* one seat in the pool.

        Raises DuplicateAssignmentError if the member already has a seat and
        CapacityExceededError if none are free.
        """
        member_id = self._check_member(member_id)
        deadline = Deadline(timeout)

        for attempt in range(1, self._max_attempts + 1):
            pool = self._load(pool_id)
            if member_id in pool.members:
                raise DuplicateAssignmentError(
                    f"'{member_id}' already holds a seat on {self._pool_label} '{pool_id}'"
                )
            if pool.used >= pool.capacity:
                raise CapacityExceededError(
                    f"No available seats on {self._pool_label} '{pool_id}' "
                    f"({pool.used} of {pool.capacity} in use)"
                )

            updated = pool.with_member(member_id, actor, reason, self._clock())
            deadline.check(f"Seat assignment on {self._pool_label} '{pool_id}'")
            if self._pool_repo.compare_and_swap(pool_id, pool, updated):
                break
            logger.debug(
                "Seat assignment on %s lost a race (attempt %d of %d)",
                pool_id, attempt, self._max_attempts,
            )
        else:
            raise self._conflict(pool_id)

        logger.info("Assigned seat on %s %s to %s", self._pool_label, pool_id, member_id)
        self._events.publish(
            SeatAssigned(
                entity_id=pool_id, actor=actor, timestamp=self._clock(), member_id=member_id
            )
        )
        self._events.notify(
            member_id,
            {"type": "seat_assigned", "pool": self._pool_label, "pool_id": pool_id},
        )
        return SeatUtilization.of(updated)

    def unassign(
        self,
        pool_id: str,
        member_id: str,
        actor: str | None = None,
        timeout: float | None = None,
    ) -> SeatUtilization:
        """Free *member_id*'s seat. Removing a non-member is a no-op."""
        member_id = self._check_member(member_id)
        deadline = Deadline(timeout)

        for attempt in range(1, self._max_attempts + 1):
            pool = self._load(pool_id)
            if member_id not in pool.members:
                logger.debug("%s is not on %s %s; nothing to do", member_id, self._pool_label, pool_id)
                return SeatUtilization.of(pool)

            updated = pool.without_member(member_id, actor, self._clock())
            deadline.check(f"Seat release on {self._pool_label} '{pool_id}'")
            if self._pool_repo.compare_and_swap(pool_id, pool, updated):
                break
            logger.debug(
                "Seat release on %s lost a race (attempt %d of %d)",
                pool_id, attempt, self._max_attempts,
            )
        else:
            raise self._conflict(pool_id)

        logger.info("Released seat on %s %s from %s", self._pool_label, pool_id, member_id)
        self._events.publish(
            SeatUnassigned(
                entity_id=pool_id, actor=actor, timestamp=self._clock(), member_id=member_id
            )
        )
        self._events.notify(
            member_id,
            {"type": "seat_unassigned", "pool": self._pool_label, "pool_id": pool_id},
        )
        return SeatUtilization.of(updated)

    def get_utilization(self, pool_id: str) -> SeatUtilization:
        """Return ``(used, capacity, available)`` for one pool.

        ``available`` is negative when capacity was reduced below usage;
        that is a reportable over-commit, not an error.
        """
        return SeatUtilization.of(self._load(pool_id))

    def get_utilization_summary(self) -> UtilizationSummary:
        pools: list[SeatPool] = self._pool_repo.list_all()
        return UtilizationSummary(
            pool_count=len(pools),
            total_seats=sum(p.capacity for p in pools),
            used_seats=sum(p.used for p in pools),
            available_seats=sum(p.available for p in pools),
            over_committed_pools=tuple(sorted(p.pool_id for p in pools if p.available < 0)),
        )

    # --- Internal helpers -----------------------------------------------------

    def _load(self, pool_id: str) -> SeatPool:
        pool = self._pool_repo.get(pool_id)
        if pool is None:
            raise EntityNotFoundError(f"{self._pool_label} '{pool_id}' not found")
        return pool

    def _conflict(self, pool_id: str) -> ConcurrencyConflictError:
        logger.warning(
            "Giving up on %s %s after %d conflicting attempts",
            self._pool_label, pool_id, self._max_attempts,
        )
        return ConcurrencyConflictError(
            f"{self._pool_label} '{pool_id}' kept changing; gave up after "
            f"{self._max_attempts} attempts"
        )

    @staticmethod
    def _check_member(member_id: str) -> str:
        if not member_id or not str(member_id).strip():
            raise ValidationError("Member ID is required")
        return str(member_id).strip()
