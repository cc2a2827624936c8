"""Unit tests for the Asset aggregate and AssetStatus parsing."""

import pytest

from itam.domain.exceptions import ValidationError
from itam.domain.model.asset import Asset, AssetStatus


class TestAssetStatusParse:

    @pytest.mark.parametrize("raw", ["In Service", "IN_SERVICE", "inservice", "in-service"])
    def test_accepts_label_and_name_forms(self, raw):
        assert AssetStatus.parse(raw) == AssetStatus.IN_SERVICE

    def test_passes_members_through(self):
        assert AssetStatus.parse(AssetStatus.REPAIR) is AssetStatus.REPAIR

    def test_unknown_label_rejected(self):
        with pytest.raises(ValidationError, match="Unknown asset status"):
            AssetStatus.parse("Lost")

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError, match="Unknown asset status"):
            AssetStatus.parse(3)


class TestAssetReceive:

    def test_new_asset_starts_expected(self):
        asset = Asset.receive("LT-001", "ThinkPad X1", owner_id="alice")
        assert asset.status == AssetStatus.EXPECTED
        assert asset.owner_id == "alice"
        assert asset.version == 0
        assert not asset.archived

    def test_trims_whitespace(self):
        asset = Asset.receive("  LT-001 ", "  ThinkPad  ")
        assert asset.id == "LT-001"
        assert asset.name == "ThinkPad"

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="Asset ID is required"):
            Asset.receive("  ", "ThinkPad")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Asset name is required"):
            Asset.receive("LT-001", "")


class TestAssetSnapshots:

    def test_with_status_bumps_version(self):
        asset = Asset.receive("LT-001", "ThinkPad")
        moved = asset.with_status(AssetStatus.RECEIVED)
        assert moved.status == AssetStatus.RECEIVED
        assert moved.version == 1
        assert asset.status == AssetStatus.EXPECTED  # original untouched

    def test_with_status_can_release_owner(self):
        asset = Asset(id="LT-001", name="ThinkPad", status=AssetStatus.IN_SERVICE, owner_id="bob")
        retired = asset.with_status(AssetStatus.RETIRED, release_owner=True)
        assert retired.owner_id is None

    def test_archive(self):
        asset = Asset.receive("LT-001", "ThinkPad")
        archived = asset.archive()
        assert archived.archived
        assert archived.version == 1

    def test_archive_twice_rejected(self):
        archived = Asset.receive("LT-001", "ThinkPad").archive()
        with pytest.raises(ValidationError, match="already archived"):
            archived.archive()
