"""JSON-file-backed implementation of LicenseRepository."""

from __future__ import annotations

from datetime import datetime

from itam.domain.model.license import License, SeatAssignmentRecord
from itam.domain.repository.license_repository import LicenseRepository
from itam.infrastructure.persistence.json_store import JsonStore


class JsonLicenseRepository(JsonStore, LicenseRepository):

    @staticmethod
    def _to_raw(lic: License) -> dict:
        return {
            "id": lic.id,
            "name": lic.name,
            "vendor": lic.vendor,
            "total_seats": lic.total_seats,
            "assigned_users": sorted(lic.assigned_users),
            "assignment_history": [
                {
                    "user_id": rec.user_id,
                    "assigned_at": rec.assigned_at.isoformat(),
                    "assigned_by": rec.assigned_by,
                    "reason": rec.reason,
                    "unassigned_at": (
                        rec.unassigned_at.isoformat() if rec.unassigned_at else None
                    ),
                }
                for rec in lic.assignment_history
            ],
            "version": lic.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> License:
        history = tuple(
            SeatAssignmentRecord(
                user_id=rec["user_id"],
                assigned_at=datetime.fromisoformat(rec["assigned_at"]),
                assigned_by=rec.get("assigned_by"),
                reason=rec.get("reason"),
                unassigned_at=(
                    datetime.fromisoformat(rec["unassigned_at"])
                    if rec.get("unassigned_at")
                    else None
                ),
            )
            for rec in raw.get("assignment_history", [])
        )
        return License(
            id=raw["id"],
            name=raw["name"],
            vendor=raw.get("vendor", ""),
            total_seats=raw["total_seats"],
            assigned_users=frozenset(raw.get("assigned_users", [])),
            assignment_history=history,
            version=raw.get("version", 0),
        )
