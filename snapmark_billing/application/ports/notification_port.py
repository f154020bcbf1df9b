from __future__ import annotations

from typing import Protocol

from snapmark_billing.domain.entities.notification import Notification


class NotificationPort(Protocol):
    def send(self, notification: Notification) -> None:
        ...
