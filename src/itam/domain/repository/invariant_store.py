"""Abstract persistence boundary shared by every aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  The contract is deliberately narrow: read a snapshot,
then write a new one only if the stored record still equals the snapshot
that was read.  Any storage technology that can do that (a row version
column, a conditional put, a lock around a dict) can back the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class InvariantStore(ABC, Generic[T]):

    @abstractmethod
    def get(self, entity_id: str) -> T | None:
        """Return the current snapshot of an entity, or None."""

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return the current snapshot of every entity."""

    @abstractmethod
    def add(self, entity: T) -> None:
        """Persist a new entity.

        Raises ValidationError if an entity with the same ID exists.
        """

    @abstractmethod
    def compare_and_swap(self, entity_id: str, expected: T, new: T) -> bool:
        """Replace *expected* with *new* atomically.

        Returns False, writing nothing, if the stored snapshot no longer
        equals *expected*.
        """
