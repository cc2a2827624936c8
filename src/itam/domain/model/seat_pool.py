"""The bounded seat pool contract.

A seat pool is any aggregate with a fixed ``capacity`` and a set of
``members`` holding one seat each.  ``SeatAllocator`` is written against
this contract only, so licenses (and anything else with seats) share the
same admission control.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


class SeatPool(ABC):

    @property
    @abstractmethod
    def pool_id(self) -> str:
        """Identity of the pool in its store."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Number of seats the pool may hand out."""

    @property
    @abstractmethod
    def members(self) -> frozenset[str]:
        """Members currently holding a seat."""

    @abstractmethod
    def with_member(
        self, member_id: str, actor: str | None, reason: str | None, at: datetime
    ) -> SeatPool:
        """Return a new snapshot with *member_id* admitted.

        Does not check capacity; admission control belongs to the allocator.
        """

    @abstractmethod
    def without_member(self, member_id: str, actor: str | None, at: datetime) -> SeatPool:
        """Return a new snapshot with *member_id* removed."""

    @property
    def used(self) -> int:
        return len(self.members)

    @property
    def available(self) -> int:
        """Free seats; negative when capacity was cut below current usage."""
        return self.capacity - self.used


# Compliance thresholds (percent of capacity in use)
AT_RISK_RATE = 90.0
UNDER_UTILIZED_RATE = 30.0


@dataclass(frozen=True)
class SeatUtilization:
    pool_id: str
    used: int
    capacity: int
    available: int

    @property
    def utilization_rate(self) -> float:
        if self.capacity <= 0:
            return 100.0 if self.used > 0 else 0.0
        return round(self.used / self.capacity * 100, 2)

    @property
    def is_over_committed(self) -> bool:
        return self.available < 0

    @property
    def compliance(self) -> str:
        if self.used > self.capacity:
            return "over_allocated"
        rate = self.utilization_rate
        if rate >= AT_RISK_RATE:
            return "at_risk"
        if rate < UNDER_UTILIZED_RATE and self.used > 0:
            return "under_utilized"
        return "compliant"

    @staticmethod
    def of(pool: SeatPool) -> SeatUtilization:
        return SeatUtilization(
            pool_id=pool.pool_id,
            used=pool.used,
            capacity=pool.capacity,
            available=pool.available,
        )


@dataclass(frozen=True)
class UtilizationSummary:
    """Seat totals across every pool in a store."""

    pool_count: int
    total_seats: int
    used_seats: int
    available_seats: int
    over_committed_pools: tuple[str, ...]

    @property
    def utilization_rate(self) -> float:
        if self.total_seats <= 0:
            return 0.0
        return round(self.used_seats / self.total_seats * 100, 2)
