"""Application services: Show License and License Summary use cases (queries)."""

from __future__ import annotations

from itam.application.dto import LicenseDTO, UtilizationSummaryDTO
from itam.domain.exceptions import EntityNotFoundError
from itam.domain.repository.license_repository import LicenseRepository
from itam.domain.service.seat_allocator import SeatAllocator


class ShowLicenseHandler:

    def __init__(self, license_repo: LicenseRepository) -> None:
        self._license_repo = license_repo

    def handle(self, license_id: str) -> LicenseDTO:
        lic = self._license_repo.get(license_id)
        if lic is None:
            raise EntityNotFoundError(f"License '{license_id}' not found")
        return LicenseDTO.from_domain(lic)


class LicenseSummaryHandler:

    def __init__(self, license_repo: LicenseRepository) -> None:
        self._license_repo = license_repo

    def handle(self) -> UtilizationSummaryDTO:
        summary = SeatAllocator(self._license_repo).get_utilization_summary()
        return UtilizationSummaryDTO.from_domain(summary)
