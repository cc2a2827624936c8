"""Abstract notification sink — tells a user about changes that affect them."""

from __future__ import annotations

from abc import ABC, abstractmethod


class NotificationSink(ABC):

    @abstractmethod
    def notify(self, user_id: str, payload: dict) -> None:
        """Deliver *payload* to *user_id*. Best effort, must not block."""
