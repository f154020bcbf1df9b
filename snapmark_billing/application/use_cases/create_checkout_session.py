from __future__ import annotations

import logging
from urllib.parse import urlencode

from snapmark_billing.application.dto.billing import (
    CreateCheckoutSessionInput,
    ProPriceConfig,
    SessionUrlOutput,
)
from snapmark_billing.application.ports.stripe_port import StripePort
from snapmark_billing.domain.services.customer_identity import derived_customer_email

from .billing_common import require_user_id


logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        stripe_port: StripePort,
        price: ProPriceConfig,
        frontend_url: str,
        customer_email_domain: str,
    ):
        self._stripe_port = stripe_port
        self._price = price
        self._frontend_url = frontend_url
        self._customer_email_domain = customer_email_domain

    def execute(self, command: CreateCheckoutSessionInput) -> SessionUrlOutput:
        user_id = require_user_id(command.user_id)
        logger.info("create_checkout_session: user_id=%s", user_id)

        result = self._stripe_port.create_checkout_session(
            user_id=user_id,
            price=self._price,
            customer_email=derived_customer_email(user_id=user_id, domain=self._customer_email_domain),
            success_url=f"{self._frontend_url}?{urlencode({'success': 'true', 'userId': user_id})}",
            cancel_url=f"{self._frontend_url}?cancelled=true",
        )

        logger.info("create_checkout_session: created session_id=%s user_id=%s", result.id, user_id)
        return SessionUrlOutput(url=result.url)
