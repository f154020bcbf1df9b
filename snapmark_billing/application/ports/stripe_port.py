from __future__ import annotations

from typing import Protocol

from snapmark_billing.application.dto.billing import (
    ProPriceConfig,
    StripeSessionResult,
    StripeWebhookEvent,
)


class StripePort(Protocol):
    def create_checkout_session(
        self,
        *,
        user_id: str,
        price: ProPriceConfig,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeSessionResult:
        ...

    def search_customer_by_user_id(self, *, user_id: str) -> str | None:
        ...

    def find_customer_by_email(self, *, email: str) -> str | None:
        ...

    def create_portal_session(self, *, customer_ref: str, return_url: str) -> StripeSessionResult:
        ...

    def verify_webhook(self, *, signature: str | None, payload: bytes) -> StripeWebhookEvent:
        ...
