"""Concrete audit and notification sinks."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from itam.domain.model.events import DomainEvent
from itam.domain.sink.audit_sink import AuditSink
from itam.domain.sink.notification_sink import NotificationSink

audit_logger = logging.getLogger("itam.audit")
notification_logger = logging.getLogger("itam.notifications")


class LoggingAuditSink(AuditSink):

    def record(self, event: DomainEvent) -> None:
        audit_logger.info("%s", json.dumps(event.to_record(), sort_keys=True))


class JsonLinesAuditSink(AuditSink):
    """Appends one JSON object per event to a file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def record(self, event: DomainEvent) -> None:
        line = json.dumps(event.to_record(), sort_keys=True)
        with self._lock:
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")


class CompositeAuditSink(AuditSink):
    """Fans an event out to several sinks; one failing does not stop the rest."""

    def __init__(self, sinks: list[AuditSink]) -> None:
        self._sinks = list(sinks)

    def record(self, event: DomainEvent) -> None:
        for sink in self._sinks:
            try:
                sink.record(event)
            except Exception:
                audit_logger.exception(
                    "%s failed to record %s", type(sink).__name__, event.type
                )


class LoggingNotificationSink(NotificationSink):

    def notify(self, user_id: str, payload: dict) -> None:
        notification_logger.info("notify %s: %s", user_id, json.dumps(payload, sort_keys=True))
