"""Application services: Assign Seat / Unassign Seat use cases.

Both delegate to the seat allocator and return the license as it looks
after the change, for display.
"""

from __future__ import annotations

from itam.application.dto import LicenseDTO
from itam.domain.exceptions import EntityNotFoundError
from itam.domain.repository.license_repository import LicenseRepository
from itam.domain.service.event_publisher import EventPublisher
from itam.domain.service.seat_allocator import DEFAULT_MAX_ATTEMPTS, SeatAllocator


class _SeatHandler:

    def __init__(
        self,
        license_repo: LicenseRepository,
        events: EventPublisher | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        allocator: SeatAllocator | None = None,
    ) -> None:
        self._license_repo = license_repo
        self._allocator = allocator or SeatAllocator(
            license_repo, events, max_attempts=max_attempts
        )

    def _reload(self, license_id: str) -> LicenseDTO:
        lic = self._license_repo.get(license_id)
        if lic is None:
            raise EntityNotFoundError(f"License '{license_id}' not found")
        return LicenseDTO.from_domain(lic)


class AssignSeatHandler(_SeatHandler):

    def handle(
        self,
        license_id: str,
        user_id: str,
        actor: str | None = None,
        reason: str | None = None,
    ) -> LicenseDTO:
        self._allocator.assign(license_id, user_id, actor=actor, reason=reason)
        return self._reload(license_id)


class UnassignSeatHandler(_SeatHandler):

    def handle(self, license_id: str, user_id: str, actor: str | None = None) -> LicenseDTO:
        self._allocator.unassign(license_id, user_id, actor=actor)
        return self._reload(license_id)
