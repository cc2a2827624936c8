"""Application service: Archive Asset use case.

Assets are never hard-deleted.  Archiving is refused while any group
still counts the asset in its stock.
"""

from __future__ import annotations

from itam.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ValidationError,
)
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository


class ArchiveAssetHandler:

    def __init__(
        self,
        asset_repo: AssetRepository,
        group_repo: AssetGroupRepository,
    ) -> None:
        self._asset_repo = asset_repo
        self._group_repo = group_repo

    def handle(self, asset_id: str) -> None:
        asset = self._asset_repo.get(asset_id)
        if asset is None:
            raise EntityNotFoundError(f"Asset '{asset_id}' not found")

        groups = self._group_repo.list_containing(asset_id)
        if groups:
            names = ", ".join(sorted(g.name for g in groups))
            raise ValidationError(
                f"Asset '{asset_id}' is still in group(s) {names}; remove it first"
            )

        if not self._asset_repo.compare_and_swap(asset_id, asset, asset.archive()):
            raise ConcurrencyConflictError(
                f"Asset '{asset_id}' changed while archiving it; re-read and retry"
            )
