"""Asset aggregate — a tracked piece of hardware and its lifecycle status.

Assets are immutable snapshots: every change produces a new record with a
bumped ``version`` so the store can compare-and-swap against the snapshot
the caller originally read.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from itam.domain.exceptions import ValidationError


class AssetStatus(Enum):
    EXPECTED = "Expected"
    RECEIVED = "Received"
    STAGED = "Staged"
    IN_SERVICE = "In Service"
    REPAIR = "Repair"
    RETIRED = "Retired"
    DISPOSED = "Disposed"

    @staticmethod
    def parse(raw: AssetStatus | str) -> AssetStatus:
        """Accept a member, its label ("In Service") or its name ("IN_SERVICE").

        Raises ValidationError for anything else.
        """
        if isinstance(raw, AssetStatus):
            return raw
        if not isinstance(raw, str):
            raise ValidationError(f"Unknown asset status: {raw!r}")
        wanted = _normalize(raw)
        for status in AssetStatus:
            if wanted in (_normalize(status.value), _normalize(status.name)):
                return status
        raise ValidationError(f"Unknown asset status: {raw!r}")


def _normalize(label: str) -> str:
    return label.replace(" ", "").replace("_", "").replace("-", "").lower()


@dataclass(frozen=True)
class Asset:
    """Aggregate root for a single tracked asset.

    Invariants:
    - ``status`` is always an ``AssetStatus`` member
    - ``status`` only changes along a transition-table edge (enforced by
      the lifecycle manager, which is the only writer)
    """

    id: str
    name: str
    status: AssetStatus = AssetStatus.EXPECTED
    owner_id: str | None = None
    archived: bool = False
    version: int = 0

    # --- Factory (used for NEW assets only) -----------------------------------

    @staticmethod
    def receive(
        asset_id: str,
        name: str,
        owner_id: str | None = None,
        status: AssetStatus = AssetStatus.EXPECTED,
    ) -> Asset:
        """Create a new asset in the lifecycle's initial *status*."""
        if not asset_id or not asset_id.strip():
            raise ValidationError("Asset ID is required")
        if not name or not name.strip():
            raise ValidationError("Asset name is required")
        return Asset(
            id=asset_id.strip(),
            name=name.strip(),
            status=status,
            owner_id=owner_id or None,
        )

    # --- Derived snapshots ----------------------------------------------------

    def with_status(self, status: AssetStatus, release_owner: bool = False) -> Asset:
        return replace(
            self,
            status=status,
            owner_id=None if release_owner else self.owner_id,
            version=self.version + 1,
        )

    def archive(self) -> Asset:
        """Soft-delete the asset. Archived assets are never hard-deleted."""
        if self.archived:
            raise ValidationError(f"Asset '{self.id}' is already archived")
        return replace(self, archived=True, version=self.version + 1)
