"""Application service: Create Asset Group use case."""

from __future__ import annotations

from itam.application.dto import AssetGroupDTO
from itam.domain.model.asset_group import AssetGroup
from itam.domain.repository.asset_group_repository import AssetGroupRepository


class CreateAssetGroupHandler:

    def __init__(self, group_repo: AssetGroupRepository) -> None:
        self._group_repo = group_repo

    def handle(
        self,
        group_id: str,
        name: str,
        category: str = "",
        min_stock: int = 0,
        location: str = "",
    ) -> AssetGroupDTO:
        group = AssetGroup.create(group_id, name, category, min_stock, location)
        self._group_repo.add(group)
        return AssetGroupDTO.from_domain(group)
