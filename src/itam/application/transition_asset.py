"""Application service: Transition Asset use case.

Thin wrapper over the lifecycle manager that returns the refreshed asset
for display.  ``InvalidTransitionError`` propagates with the valid next
states attached so the caller can offer them.
"""

from __future__ import annotations

from itam.application.dto import AssetDTO
from itam.application.show_asset import ShowAssetHandler
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository
from itam.domain.service.asset_lifecycle_manager import AssetLifecycleManager
from itam.domain.service.event_publisher import EventPublisher


class TransitionAssetHandler:

    def __init__(
        self,
        asset_repo: AssetRepository,
        group_repo: AssetGroupRepository,
        events: EventPublisher | None = None,
        manager: AssetLifecycleManager | None = None,
    ) -> None:
        self._asset_repo = asset_repo
        self._group_repo = group_repo
        self._manager = manager or AssetLifecycleManager(asset_repo, events)

    def handle(
        self,
        asset_id: str,
        target_status: str,
        actor: str | None = None,
        reason: str | None = None,
    ) -> AssetDTO:
        self._manager.request_transition(
            asset_id, target_status, actor=actor, reason=reason
        )
        show = ShowAssetHandler(self._asset_repo, self._group_repo, self._manager.table)
        return show.handle(asset_id)
