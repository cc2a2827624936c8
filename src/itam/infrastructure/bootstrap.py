"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from itam.domain.model.transition_table import TransitionTable
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository
from itam.domain.repository.license_repository import LicenseRepository
from itam.domain.service.asset_lifecycle_manager import AssetLifecycleManager
from itam.domain.service.event_publisher import EventPublisher
from itam.domain.service.group_stock_tracker import GroupStockTracker
from itam.domain.service.seat_allocator import SeatAllocator
from itam.domain.sink.audit_sink import AuditSink
from itam.infrastructure.config import Settings
from itam.infrastructure.persistence.json_asset_group_repository import (
    JsonAssetGroupRepository,
)
from itam.infrastructure.persistence.json_asset_repository import JsonAssetRepository
from itam.infrastructure.persistence.json_license_repository import (
    JsonLicenseRepository,
)
from itam.infrastructure.persistence.memory import (
    InMemoryAssetGroupRepository,
    InMemoryAssetRepository,
    InMemoryLicenseRepository,
)
from itam.infrastructure.sinks import (
    CompositeAuditSink,
    JsonLinesAuditSink,
    LoggingAuditSink,
    LoggingNotificationSink,
)


@dataclass(frozen=True)
class Container:
    settings: Settings
    asset_repo: AssetRepository
    license_repo: LicenseRepository
    group_repo: AssetGroupRepository
    events: EventPublisher
    table: TransitionTable = field(default_factory=TransitionTable.default)

    def lifecycle_manager(self) -> AssetLifecycleManager:
        return AssetLifecycleManager(self.asset_repo, self.events, self.table)

    def seat_allocator(self) -> SeatAllocator:
        return SeatAllocator(
            self.license_repo,
            self.events,
            max_attempts=self.settings.max_cas_attempts,
        )

    def stock_tracker(self) -> GroupStockTracker:
        return GroupStockTracker(
            self.group_repo,
            self.events,
            max_attempts=self.settings.max_cas_attempts,
        )


def build(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()

    if settings.store == "memory":
        asset_repo = InMemoryAssetRepository()
        license_repo = InMemoryLicenseRepository()
        group_repo = InMemoryAssetGroupRepository()
    else:
        asset_repo = JsonAssetRepository(settings.data_dir / "assets.json")
        license_repo = JsonLicenseRepository(settings.data_dir / "licenses.json")
        group_repo = JsonAssetGroupRepository(settings.data_dir / "asset_groups.json")

    sinks: list[AuditSink] = [LoggingAuditSink()]
    if settings.audit_log is not None:
        sinks.append(JsonLinesAuditSink(settings.audit_log))

    events = EventPublisher(
        audit_sink=CompositeAuditSink(sinks),
        notification_sink=LoggingNotificationSink(),
    )
    return Container(settings, asset_repo, license_repo, group_repo, events)
