"""License aggregate — a software license with a fixed number of seats.

A License is a ``SeatPool``: every user in ``assigned_users`` holds one
seat.  The seat set only changes through ``SeatAllocator``; the seat count
is an administrative edit that is allowed to drop below current usage so
that the over-commit can be reported rather than hidden.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from itam.domain.exceptions import ValidationError
from itam.domain.model.seat_pool import SeatPool


@dataclass(frozen=True)
class SeatAssignmentRecord:
    """One entry in a license's assignment history."""

    user_id: str
    assigned_at: datetime
    assigned_by: str | None = None
    reason: str | None = None
    unassigned_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.unassigned_at is None


@dataclass(frozen=True)
class License(SeatPool):
    """Aggregate root for software licenses.

    Invariants:
    - ``assigned_users`` is a set, so no user holds two seats
    - ``len(assigned_users) <= total_seats`` is guaranteed for every
      assignment; only a later ``with_total_seats`` may break it
    """

    id: str
    name: str
    total_seats: int
    vendor: str = ""
    assigned_users: frozenset[str] = frozenset()
    assignment_history: tuple[SeatAssignmentRecord, ...] = ()
    version: int = 0

    # --- Factory (used for NEW licenses only) ---------------------------------

    @staticmethod
    def create(license_id: str, name: str, total_seats: int, vendor: str = "") -> License:
        if not license_id or not license_id.strip():
            raise ValidationError("License ID is required")
        if not name or not name.strip():
            raise ValidationError("License name is required")
        _check_seat_count(total_seats)
        return License(
            id=license_id.strip(),
            name=name.strip(),
            total_seats=total_seats,
            vendor=vendor.strip(),
        )

    # --- SeatPool contract ----------------------------------------------------

    @property
    def pool_id(self) -> str:
        return self.id

    @property
    def capacity(self) -> int:
        return self.total_seats

    @property
    def members(self) -> frozenset[str]:
        return self.assigned_users

    def with_member(
        self, member_id: str, actor: str | None, reason: str | None, at: datetime
    ) -> License:
        record = SeatAssignmentRecord(
            user_id=member_id, assigned_at=at, assigned_by=actor, reason=reason
        )
        return replace(
            self,
            assigned_users=self.assigned_users | {member_id},
            assignment_history=self.assignment_history + (record,),
            version=self.version + 1,
        )

    def without_member(self, member_id: str, actor: str | None, at: datetime) -> License:
        history = list(self.assignment_history)
        # Close the most recent open record for this user
        for i in range(len(history) - 1, -1, -1):
            if history[i].user_id == member_id and history[i].is_open:
                history[i] = replace(history[i], unassigned_at=at)
                break
        return replace(
            self,
            assigned_users=self.assigned_users - {member_id},
            assignment_history=tuple(history),
            version=self.version + 1,
        )

    # --- Administrative edits -------------------------------------------------

    def with_total_seats(self, total_seats: int) -> License:
        """Change the seat count.

        Lowering it below the current usage is permitted; the pool then
        reports a negative ``available`` until seats are unassigned.
        """
        _check_seat_count(total_seats)
        return replace(self, total_seats=total_seats, version=self.version + 1)


def _check_seat_count(total_seats: int) -> None:
    if not isinstance(total_seats, int) or isinstance(total_seats, bool):
        raise ValidationError(
            f"Seat count must be an integer, got {type(total_seats).__name__}"
        )
    if total_seats < 0:
        raise ValidationError("Seat count cannot be negative")
