"""Application service: Receive Asset use case.

Registers a newly expected asset.  Every asset starts its life in the
table's initial status; nothing else may create one.
"""

from __future__ import annotations

from itam.application.dto import AssetDTO
from itam.domain.model.asset import Asset
from itam.domain.model.transition_table import TransitionTable
from itam.domain.repository.asset_repository import AssetRepository


class ReceiveAssetHandler:

    def __init__(
        self,
        asset_repo: AssetRepository,
        table: TransitionTable | None = None,
    ) -> None:
        self._asset_repo = asset_repo
        self._table = table or TransitionTable.default()

    def handle(self, asset_id: str, name: str, owner_id: str | None = None) -> AssetDTO:
        asset = Asset.receive(asset_id, name, owner_id, status=self._table.initial)
        self._asset_repo.add(asset)
        return AssetDTO.from_domain(asset, self._table.next_states(asset.status), [])
