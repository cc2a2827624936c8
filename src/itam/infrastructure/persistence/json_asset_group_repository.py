"""JSON-file-backed implementation of AssetGroupRepository.

``current_stock`` is written alongside the asset list for readers of the
raw file, but never read back: it is always recomputed from the set.
"""

from __future__ import annotations

from itam.domain.model.asset_group import AssetGroup
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.infrastructure.persistence.json_store import JsonStore


class JsonAssetGroupRepository(JsonStore, AssetGroupRepository):

    def list_containing(self, asset_id: str) -> list[AssetGroup]:
        return [g for g in self.list_all() if asset_id in g.assets]

    @staticmethod
    def _to_raw(group: AssetGroup) -> dict:
        return {
            "id": group.id,
            "name": group.name,
            "category": group.category,
            "location": group.location,
            "min_stock": group.min_stock,
            "assets": sorted(group.assets),
            "current_stock": group.current_stock,
            "version": group.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> AssetGroup:
        return AssetGroup(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category", ""),
            location=raw.get("location", ""),
            min_stock=raw.get("min_stock", 0),
            assets=frozenset(raw.get("assets", [])),
            version=raw.get("version", 0),
        )
