from __future__ import annotations

import logging

from snapmark_billing.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeSubscriptionDeletedEventData,
    StripeWebhookInput,
    StripeWebhookOutput,
)
from snapmark_billing.application.ports.entitlements_port import EntitlementsPort
from snapmark_billing.application.ports.stripe_port import StripePort
from snapmark_billing.domain.services import notifications

from .billing_common import utcnow


logger = logging.getLogger(__name__)


CHECKOUT_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"


class ProcessStripeWebhookUseCase:
    def __init__(
        self,
        *,
        entitlements_port: EntitlementsPort,
        stripe_port: StripePort,
    ):
        self._entitlements_port = entitlements_port
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        # Raises WebhookVerificationError before anything is touched.
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)
        logger.info("process_stripe_webhook: event_type=%s", event.event_type)

        if event.event_type == CHECKOUT_COMPLETED and event.checkout_completed is not None:
            return self._handle_checkout_completed(event.event_type, event.checkout_completed)

        if event.event_type == SUBSCRIPTION_DELETED and event.subscription_deleted is not None:
            return self._handle_subscription_deleted(event.event_type, event.subscription_deleted)

        return StripeWebhookOutput(event_type=event.event_type, handled=False)

    def _handle_checkout_completed(
        self,
        event_type: str,
        data: StripeCheckoutCompletedEventData,
    ) -> StripeWebhookOutput:
        if not data.user_id:
            logger.warning(
                "process_stripe_webhook: checkout_without_user_id customer_ref=%s",
                data.customer_id,
            )
            return StripeWebhookOutput(event_type=event_type, handled=False)

        self._entitlements_port.grant(user_id=data.user_id, customer_ref=data.customer_id)
        logger.info(
            "process_stripe_webhook: upgraded user_id=%s customer_ref=%s",
            data.user_id,
            data.customer_id,
        )
        notification = notifications.subscription_started(
            user_id=data.user_id,
            customer_ref=data.customer_id,
            amount_minor=data.amount_total,
            currency=data.currency,
            at=utcnow(),
        )
        return StripeWebhookOutput(event_type=event_type, handled=True, notifications=(notification,))

    def _handle_subscription_deleted(
        self,
        event_type: str,
        data: StripeSubscriptionDeletedEventData,
    ) -> StripeWebhookOutput:
        if not data.customer_id:
            logger.warning(
                "process_stripe_webhook: subscription_without_customer subscription_id=%s",
                data.subscription_id,
            )
            return StripeWebhookOutput(event_type=event_type, handled=False)

        user_id = self._entitlements_port.revoke_by_customer_ref(customer_ref=data.customer_id)
        if user_id is None:
            logger.info(
                "process_stripe_webhook: unknown_customer customer_ref=%s subscription_id=%s",
                data.customer_id,
                data.subscription_id,
            )
            return StripeWebhookOutput(event_type=event_type, handled=False)

        logger.info(
            "process_stripe_webhook: downgraded user_id=%s customer_ref=%s",
            user_id,
            data.customer_id,
        )
        notification = notifications.subscription_ended(
            user_id=user_id,
            customer_ref=data.customer_id,
            at=utcnow(),
        )
        return StripeWebhookOutput(event_type=event_type, handled=True, notifications=(notification,))
