"""Abstract repository for the Asset aggregate."""

from __future__ import annotations

from itam.domain.model.asset import Asset
from itam.domain.repository.invariant_store import InvariantStore


class AssetRepository(InvariantStore[Asset]):
    pass
