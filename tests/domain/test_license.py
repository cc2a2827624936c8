"""Unit tests for the License aggregate and seat utilization."""

import pytest

from itam.domain.exceptions import ValidationError
from itam.domain.model.license import License
from itam.domain.model.seat_pool import SeatUtilization
from tests.fakes import FIXED_NOW


class TestLicenseCreate:

    def test_create(self):
        lic = License.create("LIC-1", "Office", 10, vendor="Contoso")
        assert lic.capacity == 10
        assert lic.members == frozenset()
        assert lic.available == 10

    def test_zero_seats_allowed(self):
        assert License.create("LIC-1", "Office", 0).capacity == 0

    def test_negative_seats_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            License.create("LIC-1", "Office", -1)

    def test_non_integer_seats_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            License.create("LIC-1", "Office", "5")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="License name is required"):
            License.create("LIC-1", " ", 5)


class TestLicenseSeats:

    def test_with_member_records_history(self):
        lic = License.create("LIC-1", "Office", 2)
        updated = lic.with_member("alice", "admin", "new hire", FIXED_NOW)
        assert updated.members == {"alice"}
        assert updated.version == lic.version + 1
        (record,) = updated.assignment_history
        assert record.user_id == "alice"
        assert record.assigned_by == "admin"
        assert record.reason == "new hire"
        assert record.is_open

    def test_without_member_closes_history(self):
        lic = License.create("LIC-1", "Office", 2).with_member("alice", None, None, FIXED_NOW)
        updated = lic.without_member("alice", None, FIXED_NOW)
        assert updated.members == frozenset()
        assert updated.assignment_history[0].unassigned_at == FIXED_NOW

    def test_reducing_seats_below_usage_is_allowed(self):
        lic = (
            License.create("LIC-1", "Office", 3)
            .with_member("a", None, None, FIXED_NOW)
            .with_member("b", None, None, FIXED_NOW)
        )
        shrunk = lic.with_total_seats(1)
        assert shrunk.available == -1


class TestSeatUtilization:

    def _util(self, used, capacity):
        return SeatUtilization(pool_id="p", used=used, capacity=capacity, available=capacity - used)

    def test_rate(self):
        assert self._util(1, 3).utilization_rate == 33.33

    def test_over_allocated(self):
        util = self._util(3, 2)
        assert util.compliance == "over_allocated"
        assert util.is_over_committed

    def test_at_risk(self):
        assert self._util(9, 10).compliance == "at_risk"

    def test_under_utilized(self):
        assert self._util(2, 10).compliance == "under_utilized"

    def test_unused_is_compliant(self):
        assert self._util(0, 10).compliance == "compliant"

    def test_zero_capacity(self):
        assert self._util(0, 0).utilization_rate == 0.0
        assert self._util(1, 0).compliance == "over_allocated"
