"""Domain events.

Events record facts that already happened.  They are immutable, named in
the past tense and handed to the audit sink after the state change has
been committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from itam.domain.model.asset import AssetStatus


@dataclass(frozen=True)
class DomainEvent:
    """Base class for every event the engine emits."""

    entity_id: str
    actor: str | None
    timestamp: datetime

    @property
    def type(self) -> str:
        return type(self).__name__

    def to_record(self) -> dict:
        """Flat audit record: ``{type, entity_id, actor, timestamp, ...}``."""
        return {
            "type": self.type,
            "entity_id": self.entity_id,
            "actor": self.actor,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class StatusChanged(DomainEvent):
    from_status: AssetStatus
    to_status: AssetStatus
    reason: str | None = None

    @property
    def asset_id(self) -> str:
        return self.entity_id

    def to_record(self) -> dict:
        record = super().to_record()
        record["from"] = self.from_status.value
        record["to"] = self.to_status.value
        record["reason"] = self.reason
        return record


@dataclass(frozen=True)
class SeatAssigned(DomainEvent):
    member_id: str

    @property
    def pool_id(self) -> str:
        return self.entity_id

    def to_record(self) -> dict:
        record = super().to_record()
        record["member_id"] = self.member_id
        return record


@dataclass(frozen=True)
class SeatUnassigned(DomainEvent):
    member_id: str

    @property
    def pool_id(self) -> str:
        return self.entity_id

    def to_record(self) -> dict:
        record = super().to_record()
        record["member_id"] = self.member_id
        return record


@dataclass(frozen=True)
class AssetsAddedToGroup(DomainEvent):
    asset_ids: frozenset[str]
    current_stock: int

    def to_record(self) -> dict:
        record = super().to_record()
        record["asset_ids"] = sorted(self.asset_ids)
        record["current_stock"] = self.current_stock
        return record


@dataclass(frozen=True)
class AssetsRemovedFromGroup(DomainEvent):
    asset_ids: frozenset[str]
    current_stock: int

    def to_record(self) -> dict:
        record = super().to_record()
        record["asset_ids"] = sorted(self.asset_ids)
        record["current_stock"] = self.current_stock
        return record
