"""JSON-file-backed implementation of AssetRepository."""

from __future__ import annotations

from itam.domain.model.asset import Asset, AssetStatus
from itam.domain.repository.asset_repository import AssetRepository
from itam.infrastructure.persistence.json_store import JsonStore


class JsonAssetRepository(JsonStore, AssetRepository):

    @staticmethod
    def _to_raw(asset: Asset) -> dict:
        return {
            "id": asset.id,
            "name": asset.name,
            "status": asset.status.value,
            "owner_id": asset.owner_id,
            "archived": asset.archived,
            "version": asset.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Asset:
        return Asset(
            id=raw["id"],
            name=raw["name"],
            status=AssetStatus(raw["status"]),
            owner_id=raw.get("owner_id"),
            archived=raw.get("archived", False),
            version=raw.get("version", 0),
        )
