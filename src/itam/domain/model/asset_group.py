"""AssetGroup aggregate — a named stock of interchangeable assets.

``current_stock`` is not stored separately from the membership set: it is
computed from ``assets`` on every access, so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from itam.domain.exceptions import ValidationError


class AlertSeverity(Enum):
    URGENT = "urgent"
    WARNING = "warning"


@dataclass(frozen=True)
class AssetGroup:
    """Aggregate root for asset groups.

    Invariants:
    - ``current_stock == len(assets)`` at every observable instant
    - ``min_stock`` is a non-negative admin-set threshold
    """

    id: str
    name: str
    category: str = ""
    min_stock: int = 0
    location: str = ""
    assets: frozenset[str] = frozenset()
    version: int = 0

    # --- Factory (used for NEW groups only) -----------------------------------

    @staticmethod
    def create(
        group_id: str,
        name: str,
        category: str = "",
        min_stock: int = 0,
        location: str = "",
    ) -> AssetGroup:
        if not group_id or not group_id.strip():
            raise ValidationError("Group ID is required")
        if not name or not name.strip():
            raise ValidationError("Group name is required")
        _check_min_stock(min_stock)
        return AssetGroup(
            id=group_id.strip(),
            name=name.strip(),
            category=category.strip(),
            min_stock=min_stock,
            location=location.strip(),
        )

    # --- Computed properties --------------------------------------------------

    @property
    def current_stock(self) -> int:
        return len(self.assets)

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock < self.min_stock

    # --- Derived snapshots ----------------------------------------------------

    def with_assets(self, asset_ids: frozenset[str]) -> AssetGroup:
        return replace(self, assets=self.assets | asset_ids, version=self.version + 1)

    def without_assets(self, asset_ids: frozenset[str]) -> AssetGroup:
        return replace(self, assets=self.assets - asset_ids, version=self.version + 1)

    def with_min_stock(self, min_stock: int) -> AssetGroup:
        _check_min_stock(min_stock)
        return replace(self, min_stock=min_stock, version=self.version + 1)


@dataclass(frozen=True)
class LowStockAlert:
    group_id: str
    group_name: str
    current_stock: int
    min_stock: int
    severity: AlertSeverity

    @property
    def shortfall(self) -> int:
        return self.min_stock - self.current_stock

    @staticmethod
    def for_group(group: AssetGroup) -> LowStockAlert:
        severity = AlertSeverity.URGENT if group.current_stock == 0 else AlertSeverity.WARNING
        return LowStockAlert(
            group_id=group.id,
            group_name=group.name,
            current_stock=group.current_stock,
            min_stock=group.min_stock,
            severity=severity,
        )


def _check_min_stock(min_stock: int) -> None:
    if not isinstance(min_stock, int) or isinstance(min_stock, bool):
        raise ValidationError(
            f"Minimum stock must be an integer, got {type(min_stock).__name__}"
        )
    if min_stock < 0:
        raise ValidationError("Minimum stock cannot be negative")
