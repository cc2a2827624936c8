"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from itam.domain.model.asset import Asset, AssetStatus
from itam.domain.model.asset_group import AssetGroup, LowStockAlert
from itam.domain.model.license import License
from itam.domain.model.seat_pool import SeatUtilization, UtilizationSummary


@dataclass(frozen=True)
class AssetDTO:
    id: str
    name: str
    status: str
    owner_id: str | None
    archived: bool
    valid_next_states: list[str]
    group_ids: list[str]

    @staticmethod
    def from_domain(asset: Asset, next_states, group_ids) -> AssetDTO:
        return AssetDTO(
            id=asset.id,
            name=asset.name,
            status=asset.status.value,
            owner_id=asset.owner_id,
            archived=asset.archived,
            valid_next_states=[
                s.value for s in sorted(next_states, key=list(AssetStatus).index)
            ],
            group_ids=sorted(group_ids),
        )


@dataclass(frozen=True)
class SeatUtilizationDTO:
    used: int
    capacity: int
    available: int
    utilization_rate: float
    compliance: str

    @staticmethod
    def from_domain(util: SeatUtilization) -> SeatUtilizationDTO:
        return SeatUtilizationDTO(
            used=util.used,
            capacity=util.capacity,
            available=util.available,
            utilization_rate=util.utilization_rate,
            compliance=util.compliance,
        )


@dataclass(frozen=True)
class LicenseDTO:
    id: str
    name: str
    vendor: str
    assigned_users: list[str]
    utilization: SeatUtilizationDTO

    @property
    def is_over_committed(self) -> bool:
        return self.utilization.available < 0

    @staticmethod
    def from_domain(lic: License) -> LicenseDTO:
        return LicenseDTO(
            id=lic.id,
            name=lic.name,
            vendor=lic.vendor,
            assigned_users=sorted(lic.assigned_users),
            utilization=SeatUtilizationDTO.from_domain(SeatUtilization.of(lic)),
        )


@dataclass(frozen=True)
class UtilizationSummaryDTO:
    license_count: int
    total_seats: int
    used_seats: int
    available_seats: int
    utilization_rate: float
    over_committed: list[str]

    @staticmethod
    def from_domain(summary: UtilizationSummary) -> UtilizationSummaryDTO:
        return UtilizationSummaryDTO(
            license_count=summary.pool_count,
            total_seats=summary.total_seats,
            used_seats=summary.used_seats,
            available_seats=summary.available_seats,
            utilization_rate=summary.utilization_rate,
            over_committed=list(summary.over_committed_pools),
        )


@dataclass(frozen=True)
class AssetGroupDTO:
    id: str
    name: str
    category: str
    location: str
    min_stock: int
    current_stock: int
    assets: list[str]

    @staticmethod
    def from_domain(group: AssetGroup) -> AssetGroupDTO:
        return AssetGroupDTO(
            id=group.id,
            name=group.name,
            category=group.category,
            location=group.location,
            min_stock=group.min_stock,
            current_stock=group.current_stock,
            assets=sorted(group.assets),
        )


@dataclass(frozen=True)
class LowStockAlertDTO:
    group_id: str
    group_name: str
    current_stock: int
    min_stock: int
    severity: str

    @staticmethod
    def from_domain(alert: LowStockAlert) -> LowStockAlertDTO:
        return LowStockAlertDTO(
            group_id=alert.group_id,
            group_name=alert.group_name,
            current_stock=alert.current_stock,
            min_stock=alert.min_stock,
            severity=alert.severity.value,
        )
