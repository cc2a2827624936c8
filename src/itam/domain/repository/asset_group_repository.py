"""Abstract repository for the AssetGroup aggregate."""

from __future__ import annotations

from abc import abstractmethod

from itam.domain.model.asset_group import AssetGroup
from itam.domain.repository.invariant_store import InvariantStore


class AssetGroupRepository(InvariantStore[AssetGroup]):

    @abstractmethod
    def list_containing(self, asset_id: str) -> list[AssetGroup]:
        """Return every group whose membership includes *asset_id*."""
