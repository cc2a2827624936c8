"""In-memory, thread-safe implementations of the repositories.

Snapshots are immutable, so the dict can hand them out directly; a lock
makes each compare-and-swap atomic with respect to every other writer in
the process.
"""

from __future__ import annotations

import threading

from itam.domain.exceptions import ValidationError
from itam.domain.model.asset_group import AssetGroup
from itam.domain.repository.asset_group_repository import AssetGroupRepository
from itam.domain.repository.asset_repository import AssetRepository
from itam.domain.repository.invariant_store import InvariantStore
from itam.domain.repository.license_repository import LicenseRepository


class InMemoryStore(InvariantStore):

    def __init__(self, entities=None) -> None:
        self._lock = threading.Lock()
        self._store: dict = {}
        for entity in entities or []:
            self._store[entity.id] = entity

    # --- InvariantStore interface ---------------------------------------------

    def get(self, entity_id: str):
        with self._lock:
            return self._store.get(entity_id)

    def list_all(self) -> list:
        with self._lock:
            return list(self._store.values())

    def add(self, entity) -> None:
        with self._lock:
            if entity.id in self._store:
                raise ValidationError(f"'{entity.id}' already exists")
            self._store[entity.id] = entity

    def compare_and_swap(self, entity_id: str, expected, new) -> bool:
        with self._lock:
            if self._store.get(entity_id) != expected:
                return False
            self._store[entity_id] = new
            return True


class InMemoryAssetRepository(InMemoryStore, AssetRepository):
    pass


class InMemoryLicenseRepository(InMemoryStore, LicenseRepository):
    pass


class InMemoryAssetGroupRepository(InMemoryStore, AssetGroupRepository):

    def list_containing(self, asset_id: str) -> list[AssetGroup]:
        return [g for g in self.list_all() if asset_id in g.assets]
