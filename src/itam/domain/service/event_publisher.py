"""Best-effort delivery of domain events to the audit and notification sinks.

Sink failures are logged and dropped: by the time an event is published
the state change is committed, and audit is not transactional with it.
"""

from __future__ import annotations

import logging

from itam.domain.model.events import DomainEvent
from itam.domain.sink.audit_sink import AuditSink
from itam.domain.sink.notification_sink import NotificationSink

logger = logging.getLogger(__name__)


class EventPublisher:

    def __init__(
        self,
        audit_sink: AuditSink | None = None,
        notification_sink: NotificationSink | None = None,
    ) -> None:
        self._audit_sink = audit_sink
        self._notification_sink = notification_sink

    def publish(self, event: DomainEvent) -> None:
        if self._audit_sink is None:
            return
        try:
            self._audit_sink.record(event)
        except Exception:
            logger.exception(
                "Audit sink failed to record %s for %s", event.type, event.entity_id
            )

    def notify(self, user_id: str | None, payload: dict) -> None:
        if self._notification_sink is None or not user_id:
            return
        try:
            self._notification_sink.notify(user_id, payload)
        except Exception:
            logger.exception("Notification sink failed for user %s", user_id)
