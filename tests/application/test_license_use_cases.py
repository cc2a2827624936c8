"""Integration tests for the license seat use cases."""

import pytest

from itam.application.create_license import CreateLicenseHandler
from itam.application.license_seats import AssignSeatHandler, UnassignSeatHandler
from itam.application.set_license_seats import SetLicenseSeatsHandler
from itam.application.show_license import LicenseSummaryHandler, ShowLicenseHandler
from itam.domain.exceptions import CapacityExceededError, EntityNotFoundError
from itam.infrastructure.persistence.memory import InMemoryLicenseRepository


def _setup(seats=2):
    repo = InMemoryLicenseRepository()
    CreateLicenseHandler(repo).handle("LIC-1", "Office", seats, vendor="Contoso")
    return repo


class TestSeatUseCases:

    def test_assign_and_unassign(self):
        repo = _setup()
        dto = AssignSeatHandler(repo).handle("LIC-1", "alice", actor="admin")
        assert dto.assigned_users == ["alice"]
        assert dto.utilization.available == 1

        dto = UnassignSeatHandler(repo).handle("LIC-1", "alice")
        assert dto.assigned_users == []

    def test_full_license_rejects(self):
        repo = _setup(seats=1)
        AssignSeatHandler(repo).handle("LIC-1", "alice")
        with pytest.raises(CapacityExceededError):
            AssignSeatHandler(repo).handle("LIC-1", "bob")


class TestSetLicenseSeats:

    def test_reduce_below_usage_is_flagged(self):
        repo = _setup(seats=3)
        for user in ("a", "b", "c"):
            AssignSeatHandler(repo).handle("LIC-1", user)

        dto = SetLicenseSeatsHandler(repo).handle("LIC-1", 2)
        assert dto.is_over_committed
        assert dto.utilization.available == -1
        assert dto.utilization.compliance == "over_allocated"
        assert len(dto.assigned_users) == 3

    def test_missing_license(self):
        repo = _setup()
        with pytest.raises(EntityNotFoundError):
            SetLicenseSeatsHandler(repo).handle("NOPE", 2)


class TestLicenseQueries:

    def test_show(self):
        repo = _setup(seats=10)
        AssignSeatHandler(repo).handle("LIC-1", "alice")
        dto = ShowLicenseHandler(repo).handle("LIC-1")
        assert dto.vendor == "Contoso"
        assert dto.utilization.utilization_rate == 10.0
        assert dto.utilization.compliance == "under_utilized"

    def test_summary(self):
        repo = _setup(seats=4)
        CreateLicenseHandler(repo).handle("LIC-2", "IDE", 6)
        AssignSeatHandler(repo).handle("LIC-2", "bob")
        dto = LicenseSummaryHandler(repo).handle()
        assert dto.license_count == 2
        assert dto.total_seats == 10
        assert dto.used_seats == 1
        assert dto.utilization_rate == 10.0
        assert dto.over_committed == []
