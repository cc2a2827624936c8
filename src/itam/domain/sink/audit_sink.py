"""Abstract audit sink — receives every committed domain event."""

from __future__ import annotations

from abc import ABC, abstractmethod

from itam.domain.model.events import DomainEvent


class AuditSink(ABC):

    @abstractmethod
    def record(self, event: DomainEvent) -> None:
        """Append an event to the audit trail.

        Best effort: the state change the event describes is already
        committed and is never rolled back if this fails.
        """
