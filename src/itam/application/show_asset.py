"""Application service: Show Asset use case (query)."""

from __future__ import annotations

from itam.application.dto import AssetDTO
from itam.domain.exceptions import EntityNotFoundError
from itam.domain.model.transition_table import TransitionTable
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository


class ShowAssetHandler:

    def __init__(
        self,
        asset_repo: AssetRepository,
        group_repo: AssetGroupRepository,
        table: TransitionTable | None = None,
    ) -> None:
        self._asset_repo = asset_repo
        self._group_repo = group_repo
        self._table = table or TransitionTable.default()

    def handle(self, asset_id: str) -> AssetDTO:
        asset = self._asset_repo.get(asset_id)
        if asset is None:
            raise EntityNotFoundError(f"Asset '{asset_id}' not found")

        next_states = self._table.next_states(asset.status)
        groups = self._group_repo.list_containing(asset_id)
        return AssetDTO.from_domain(asset, next_states, [g.id for g in groups])
