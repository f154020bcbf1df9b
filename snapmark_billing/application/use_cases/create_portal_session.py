from __future__ import annotations

import logging

from snapmark_billing.application.dto.billing import CreatePortalSessionInput, SessionUrlOutput
from snapmark_billing.application.ports.entitlements_port import EntitlementsPort
from snapmark_billing.application.ports.stripe_port import StripePort
from snapmark_billing.domain.exceptions import CustomerNotFoundError, PaymentProviderError
from snapmark_billing.domain.services.customer_identity import derived_customer_email

from .billing_common import require_user_id


logger = logging.getLogger(__name__)


class CreatePortalSessionUseCase:
    """Open a Stripe billing portal for the user's customer.

    The customer is resolved from the local store first, then by a Stripe
    metadata search, then by the derived customer e-mail. Refs found at
    Stripe are remembered locally.
    """

    def __init__(
        self,
        *,
        entitlements_port: EntitlementsPort,
        stripe_port: StripePort,
        frontend_url: str,
        customer_email_domain: str,
    ):
        self._entitlements_port = entitlements_port
        self._stripe_port = stripe_port
        self._frontend_url = frontend_url
        self._customer_email_domain = customer_email_domain

    def execute(self, command: CreatePortalSessionInput) -> SessionUrlOutput:
        user_id = require_user_id(command.user_id)
        logger.info("create_portal_session: user_id=%s", user_id)

        customer_ref = self._resolve_customer_ref(user_id)
        if customer_ref is None:
            logger.info("create_portal_session: customer_not_found user_id=%s", user_id)
            raise CustomerNotFoundError(
                "No active subscription found. Please contact support or subscribe again."
            )

        result = self._stripe_port.create_portal_session(
            customer_ref=customer_ref,
            return_url=f"{self._frontend_url}?portal=closed",
        )
        logger.info(
            "create_portal_session: created session_id=%s user_id=%s customer_ref=%s",
            result.id,
            user_id,
            customer_ref,
        )
        return SessionUrlOutput(url=result.url)

    def _resolve_customer_ref(self, user_id: str) -> str | None:
        customer_ref = self._entitlements_port.resolve_customer_ref(user_id=user_id)
        if customer_ref:
            logger.info("create_portal_session: resolved source=store customer_ref=%s", customer_ref)
            return customer_ref

        try:
            customer_ref = self._stripe_port.search_customer_by_user_id(user_id=user_id)
        except PaymentProviderError as exc:
            # Customer search is not available on every Stripe account.
            logger.warning("create_portal_session: metadata_search_failed user_id=%s error=%s", user_id, exc)
            customer_ref = None

        if not customer_ref:
            email = derived_customer_email(user_id=user_id, domain=self._customer_email_domain)
            customer_ref = self._stripe_port.find_customer_by_email(email=email)
            source = "email"
        else:
            source = "metadata"

        if not customer_ref:
            return None

        logger.info("create_portal_session: resolved source=%s customer_ref=%s", source, customer_ref)
        self._entitlements_port.associate(user_id=user_id, customer_ref=customer_ref)
        return customer_ref
