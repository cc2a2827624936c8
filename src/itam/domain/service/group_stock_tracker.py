"""Domain service: Group Stock Tracker.

Membership changes are set union / difference applied in one
compare-and-swap together with the stock they imply, so a reader never
sees a group whose stock disagrees with its asset set.  Union and
difference commute, so a lost swap is simply re-applied to a fresh read,
up to ``max_attempts`` times.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from itam.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ValidationError,
)
from itam.domain.model.asset_group import AssetGroup, LowStockAlert
from itam.domain.model.events import AssetsAddedToGroup, AssetsRemovedFromGroup
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.service.deadline import Deadline
from itam.domain.service.event_publisher import EventPublisher
from itam.domain.service.seat_allocator import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GroupStockTracker:

    def __init__(
        self,
        group_repo: AssetGroupRepository,
        events: EventPublisher | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock=_utcnow,
    ) -> None:
        if max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1")
        self._group_repo = group_repo
        self._events = events or EventPublisher()
        self._max_attempts = max_attempts
        self._clock = clock

    def add_assets(
        self,
        group_id: str,
        asset_ids,
        actor: str | None = None,
        timeout: float | None = None,
    ) -> AssetGroup:
        """Add assets to a group; IDs already present are skipped."""
        wanted = self._check_ids(asset_ids)
        deadline = Deadline(timeout)

        for _ in range(self._max_attempts):
            group = self._load(group_id)
            added = wanted - group.assets
            if not added:
                return group
            updated = group.with_assets(added)
            deadline.check(f"Adding assets to group '{group_id}'")
            if self._group_repo.compare_and_swap(group_id, group, updated):
                break
        else:
            raise self._conflict(group_id)

        logger.info(
            "Added %d asset(s) to group %s (stock %d)",
            len(added), group_id, updated.current_stock,
        )
        self._events.publish(
            AssetsAddedToGroup(
                entity_id=group_id,
                actor=actor,
                timestamp=self._clock(),
                asset_ids=frozenset(added),
                current_stock=updated.current_stock,
            )
        )
        return updated

    def remove_assets(
        self,
        group_id: str,
        asset_ids,
        actor: str | None = None,
        timeout: float | None = None,
    ) -> AssetGroup:
        """Remove assets from a group; IDs that are not members are ignored."""
        unwanted = self._check_ids(asset_ids)
        deadline = Deadline(timeout)

        for _ in range(self._max_attempts):
            group = self._load(group_id)
            removed = unwanted & group.assets
            if not removed:
                return group
            updated = group.without_assets(removed)
            deadline.check(f"Removing assets from group '{group_id}'")
            if self._group_repo.compare_and_swap(group_id, group, updated):
                break
        else:
            raise self._conflict(group_id)

        logger.info(
            "Removed %d asset(s) from group %s (stock %d)",
            len(removed), group_id, updated.current_stock,
        )
        self._events.publish(
            AssetsRemovedFromGroup(
                entity_id=group_id,
                actor=actor,
                timestamp=self._clock(),
                asset_ids=frozenset(removed),
                current_stock=updated.current_stock,
            )
        )
        return updated

    def set_min_stock(self, group_id: str, min_stock: int) -> AssetGroup:
        """Administrative edit of a group's low-stock threshold."""
        group = self._load(group_id)
        updated = group.with_min_stock(min_stock)
        if not self._group_repo.compare_and_swap(group_id, group, updated):
            raise ConcurrencyConflictError(
                f"Group '{group_id}' changed while editing it; re-read and retry"
            )
        return updated

    def compute_low_stock_alerts(self) -> list[LowStockAlert]:
        """Groups below their minimum stock, most depleted first."""
        alerts = [
            LowStockAlert.for_group(group)
            for group in self._group_repo.list_all()
            if group.is_low_stock
        ]
        alerts.sort(key=lambda a: (a.current_stock, a.group_id))
        return alerts

    # --- Internal helpers -----------------------------------------------------

    def _load(self, group_id: str) -> AssetGroup:
        group = self._group_repo.get(group_id)
        if group is None:
            raise EntityNotFoundError(f"Asset group '{group_id}' not found")
        return group

    def _conflict(self, group_id: str) -> ConcurrencyConflictError:
        logger.warning(
            "Giving up on group %s after %d conflicting attempts",
            group_id, self._max_attempts,
        )
        return ConcurrencyConflictError(
            f"Asset group '{group_id}' kept changing; gave up after "
            f"{self._max_attempts} attempts"
        )

    @staticmethod
    def _check_ids(asset_ids) -> frozenset[str]:
        if isinstance(asset_ids, str):
            raise ValidationError("Asset IDs must be a collection, not a single string")
        ids = frozenset(str(a).strip() for a in asset_ids)
        if "" in ids:
            raise ValidationError("Asset IDs cannot be blank")
        return ids
