"""Application service: Create License use case."""

from __future__ import annotations

from itam.application.dto import LicenseDTO
from itam.domain.model.license import License
from itam.domain.repository.license_repository import LicenseRepository


class CreateLicenseHandler:

    def __init__(self, license_repo: LicenseRepository) -> None:
        self._license_repo = license_repo

    def handle(
        self, license_id: str, name: str, total_seats: int, vendor: str = ""
    ) -> LicenseDTO:
        lic = License.create(license_id, name, total_seats, vendor)
        self._license_repo.add(lic)
        return LicenseDTO.from_domain(lic)
