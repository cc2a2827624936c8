"""Domain service: Asset Lifecycle Manager.

The only writer of ``Asset.status``.  Every request is validated against
the transition table using a fresh read, then applied with a single
compare-and-swap conditioned on that read.  A lost swap is reported to
the caller as ``ConcurrencyConflictError`` and is never retried here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from itam.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    InvalidTransitionError,
    ValidationError,
)
from itam.domain.model.asset import Asset, AssetStatus
from itam.domain.model.events import StatusChanged
from itam.domain.model.transition_table import SideEffect, TransitionTable
from itam.domain.repository.asset_repository import AssetRepository
from itam.domain.service.deadline import Deadline
from itam.domain.service.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssetLifecycleManager:

    def __init__(
        self,
        asset_repo: AssetRepository,
        events: EventPublisher | None = None,
        table: TransitionTable | None = None,
        clock=_utcnow,
    ) -> None:
        self._asset_repo = asset_repo
        self._events = events or EventPublisher()
        self._table = table or TransitionTable.default()
        self._clock = clock

    @property
    def table(self) -> TransitionTable:
        return self._table

    def request_transition(
        self,
        asset_id: str,
        target_status: AssetStatus | str,
        actor: str | None = None,
        reason: str | None = None,
        timeout: float | None = None,
    ) -> AssetStatus:
        """Move an asset to *target_status* along a legal edge.

        Repeating the current status is a successful no-op, so callers
        can retry safely.  Returns the asset's status afterwards.
        """
        deadline = Deadline(timeout)
        target = AssetStatus.parse(target_status)
        asset = self._load(asset_id)
        current = asset.status

        if asset.archived:
            raise ValidationError(f"Asset '{asset_id}' is archived")

        if target == current:
            logger.debug("Asset %s already %s; nothing to do", asset_id, current.value)
            return current

        if not self._table.is_legal(current, target):
            logger.debug(
                "Rejected %s -> %s for asset %s", current.value, target.value, asset_id
            )
            raise InvalidTransitionError(
                current, target, self._sorted(self._table.next_states(current))
            )

        effects = self._table.side_effects(current, target)
        updated = asset.with_status(
            target, release_owner=SideEffect.RELEASE_OWNER in effects
        )

        deadline.check(f"Transition of asset '{asset_id}'")
        if not self._asset_repo.compare_and_swap(asset_id, asset, updated):
            raise ConcurrencyConflictError(
                f"Asset '{asset_id}' changed while moving it to {target.value}; "
                f"re-read and retry"
            )

        logger.info(
            "Asset %s moved %s -> %s by %s", asset_id, current.value, target.value, actor
        )
        self._events.publish(
            StatusChanged(
                entity_id=asset_id,
                actor=actor,
                timestamp=self._clock(),
                from_status=current,
                to_status=target,
                reason=reason,
            )
        )
        if SideEffect.NOTIFY_OWNER in effects:
            self._events.notify(
                asset.owner_id,
                {
                    "type": "asset_status_changed",
                    "asset_id": asset_id,
                    "asset_name": asset.name,
                    "from": current.value,
                    "to": target.value,
                },
            )
        return target

    def get_valid_next_states(self, asset_id: str) -> list[AssetStatus]:
        """Statuses the asset may move to next, in lifecycle order."""
        asset = self._load(asset_id)
        return self._sorted(self._table.next_states(asset.status))

    # --- Internal helpers -----------------------------------------------------

    def _load(self, asset_id: str) -> Asset:
        asset = self._asset_repo.get(asset_id)
        if asset is None:
            raise EntityNotFoundError(f"Asset '{asset_id}' not found")
        return asset

    @staticmethod
    def _sorted(states) -> list[AssetStatus]:
        order = list(AssetStatus)
        return sorted(states, key=order.index)
