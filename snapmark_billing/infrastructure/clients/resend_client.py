from __future__ import annotations

import logging

import httpx

from snapmark_billing.application.ports.notification_port import NotificationPort
from snapmark_billing.domain.entities.notification import Notification


logger = logging.getLogger(__name__)


class ResendClient(NotificationPort):
    """Admin e-mail alerts through the Resend HTTP API.

    Delivery is best effort: a missing key or recipient disables sending and
    any transport failure is logged, never raised.
    """

    def __init__(
        self,
        *,
        api_key: str,
        to_address: str,
        from_address: str,
        api_base: str = "https://api.resend.com",
        timeout_seconds: float = 10,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_key = api_key
        self._to_address = to_address
        self._from_address = from_address
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._api_key and self._to_address)

    def send(self, notification: Notification) -> None:
        if not self.enabled:
            logger.info("resend_client: not_configured skipping subject=%s", notification.subject)
            return

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(
                    f"{self._api_base}/emails",
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json={
                        "from": self._from_address,
                        "to": [self._to_address],
                        "subject": notification.subject,
                        "html": notification.html,
                    },
                )
                response.raise_for_status()
        except Exception:
            logger.exception("resend_client: send_failed subject=%s", notification.subject)
            return

        logger.info("resend_client: sent subject=%s", notification.subject)
