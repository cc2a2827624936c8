"""Application services: Show Asset Group and Low Stock Alerts use cases (queries)."""

from __future__ import annotations

from itam.application.dto import AssetGroupDTO, LowStockAlertDTO
from itam.domain.exceptions import EntityNotFoundError
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.service.group_stock_tracker import GroupStockTracker


class ShowAssetGroupHandler:

    def __init__(self, group_repo: AssetGroupRepository) -> None:
        self._group_repo = group_repo

    def handle(self, group_id: str) -> AssetGroupDTO:
        group = self._group_repo.get(group_id)
        if group is None:
            raise EntityNotFoundError(f"Asset group '{group_id}' not found")
        return AssetGroupDTO.from_domain(group)


class LowStockAlertsHandler:

    def __init__(self, group_repo: AssetGroupRepository) -> None:
        self._group_repo = group_repo

    def handle(self) -> list[LowStockAlertDTO]:
        alerts = GroupStockTracker(self._group_repo).compute_low_stock_alerts()
        return [LowStockAlertDTO.from_domain(a) for a in alerts]
