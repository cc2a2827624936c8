"""Application services: group membership and threshold use cases.

Asset IDs are checked against the asset repository before the group is
touched, so a group never counts an asset that does not exist or has
been archived.
"""

from __future__ import annotations

from itam.application.dto import AssetGroupDTO
from itam.domain.exceptions import EntityNotFoundError, ValidationError
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository
from itam.domain.service.event_publisher import EventPublisher
from itam.domain.service.group_stock_tracker import GroupStockTracker
from itam.domain.service.seat_allocator import DEFAULT_MAX_ATTEMPTS


class AddAssetsToGroupHandler:

    def __init__(
        self,
        group_repo: AssetGroupRepository,
        asset_repo: AssetRepository,
        events: EventPublisher | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        tracker: GroupStockTracker | None = None,
    ) -> None:
        self._asset_repo = asset_repo
        self._tracker = tracker or GroupStockTracker(
            group_repo, events, max_attempts=max_attempts
        )

    def handle(
        self, group_id: str, asset_ids: list[str], actor: str | None = None
    ) -> AssetGroupDTO:
        for asset_id in asset_ids:
            asset = self._asset_repo.get(asset_id)
            if asset is None:
                raise EntityNotFoundError(f"Asset '{asset_id}' not found")
            if asset.archived:
                raise ValidationError(f"Asset '{asset_id}' is archived")
        group = self._tracker.add_assets(group_id, asset_ids, actor=actor)
        return AssetGroupDTO.from_domain(group)


class RemoveAssetsFromGroupHandler:

    def __init__(
        self,
        group_repo: AssetGroupRepository,
        events: EventPublisher | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        tracker: GroupStockTracker | None = None,
    ) -> None:
        self._tracker = tracker or GroupStockTracker(
            group_repo, events, max_attempts=max_attempts
        )

    def handle(
        self, group_id: str, asset_ids: list[str], actor: str | None = None
    ) -> AssetGroupDTO:
        group = self._tracker.remove_assets(group_id, asset_ids, actor=actor)
        return AssetGroupDTO.from_domain(group)


class SetMinStockHandler:

    def __init__(
        self,
        group_repo: AssetGroupRepository,
        tracker: GroupStockTracker | None = None,
    ) -> None:
        self._tracker = tracker or GroupStockTracker(group_repo)

    def handle(self, group_id: str, min_stock: int) -> AssetGroupDTO:
        return AssetGroupDTO.from_domain(self._tracker.set_min_stock(group_id, min_stock))
