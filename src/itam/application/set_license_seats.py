"""Application service: Set License Seats use case.

An administrative edit of the seat count.  Cutting seats below current
usage is allowed and reported back through ``LicenseDTO.is_over_committed``;
no seat is taken away automatically.
"""

from __future__ import annotations

import logging

from itam.application.dto import LicenseDTO
from itam.domain.exceptions import ConcurrencyConflictError, EntityNotFoundError
from itam.domain.repository.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class SetLicenseSeatsHandler:

    def __init__(self, license_repo: LicenseRepository) -> None:
        self._license_repo = license_repo

    def handle(self, license_id: str, total_seats: int) -> LicenseDTO:
        lic = self._license_repo.get(license_id)
        if lic is None:
            raise EntityNotFoundError(f"License '{license_id}' not found")

        updated = lic.with_total_seats(total_seats)
        if not self._license_repo.compare_and_swap(license_id, lic, updated):
            raise ConcurrencyConflictError(
                f"License '{license_id}' changed while editing seats; re-read and retry"
            )

        dto = LicenseDTO.from_domain(updated)
        if dto.is_over_committed:
            logger.warning(
                "License %s is over-committed: %d users on %d seats",
                license_id, dto.utilization.used, dto.utilization.capacity,
            )
        return dto
