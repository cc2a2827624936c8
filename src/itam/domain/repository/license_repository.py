"""Abstract repository for the License aggregate."""

from __future__ import annotations

from itam.domain.model.license import License
from itam.domain.repository.invariant_store import InvariantStore


class LicenseRepository(InvariantStore[License]):
    pass
