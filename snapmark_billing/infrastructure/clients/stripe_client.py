from __future__ import annotations

import logging

import stripe

from snapmark_billing.application.dto.billing import (
    ProPriceConfig,
    StripeCheckoutCompletedEventData,
    StripeSessionResult,
    StripeSubscriptionDeletedEventData,
    StripeWebhookEvent,
)
from snapmark_billing.application.ports.stripe_port import StripePort
from snapmark_billing.domain.exceptions import PaymentProviderError, WebhookVerificationError
from snapmark_billing.domain.services.customer_identity import (
    USER_ID_METADATA_KEY,
    customer_metadata_query,
)


logger = logging.getLogger(__name__)


class StripeClient(StripePort):
    def __init__(self, *, secret_key: str, webhook_secret: str):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret

    def create_checkout_session(
        self,
        *,
        user_id: str,
        price: ProPriceConfig,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeSessionResult:
        payload: dict = {
            "payment_method_types": ["card"],
            "mode": "subscription",
            "customer_email": customer_email,
            "line_items": [
                {
                    "price_data": {
                        "currency": price.currency,
                        "product_data": {
                            "name": price.product_name,
                            "description": price.product_description,
                        },
                        "unit_amount": price.unit_amount,
                        "recurring": {"interval": price.interval},
                    },
                    "quantity": 1,
                }
            ],
            "metadata": {USER_ID_METADATA_KEY: user_id},
            "client_reference_id": user_id,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }

        try:
            session = stripe.checkout.Session.create(**payload)
        except Exception as exc:
            logger.error("stripe_client: checkout_session_failed user_id=%s error=%s", user_id, exc)
            raise PaymentProviderError(str(exc)) from exc

        return _session_result(session, what="checkout session")

    def search_customer_by_user_id(self, *, user_id: str) -> str | None:
        try:
            result = stripe.Customer.search(query=customer_metadata_query(user_id=user_id))
        except Exception as exc:
            raise PaymentProviderError(str(exc)) from exc

        customers = list(getattr(result, "data", None) or [])
        logger.info("stripe_client: customer_search user_id=%s found=%s", user_id, len(customers))
        return _first_customer_id(customers)

    def find_customer_by_email(self, *, email: str) -> str | None:
        try:
            result = stripe.Customer.list(email=email, limit=1)
        except Exception as exc:
            raise PaymentProviderError(str(exc)) from exc

        customers = list(getattr(result, "data", None) or [])
        logger.info("stripe_client: customer_list email=%s found=%s", email, len(customers))
        return _first_customer_id(customers)

    def create_portal_session(self, *, customer_ref: str, return_url: str) -> StripeSessionResult:
        try:
            session = stripe.billing_portal.Session.create(customer=customer_ref, return_url=return_url)
        except Exception as exc:
            logger.error("stripe_client: portal_session_failed customer_ref=%s error=%s", customer_ref, exc)
            raise PaymentProviderError(str(exc)) from exc

        return _session_result(session, what="billing portal session")

    def verify_webhook(self, *, signature: str | None, payload: bytes) -> StripeWebhookEvent:
        if not signature:
            raise WebhookVerificationError("Missing Stripe-Signature header.")
        if not self._webhook_secret:
            raise WebhookVerificationError("Webhook signing secret is not configured.")

        try:
            event = stripe.Webhook.construct_event(
                payload=payload,
                sig_header=signature,
                secret=self._webhook_secret,
            )
        except Exception as exc:
            logger.warning("stripe_client: webhook_verification_failed error=%s", exc)
            raise WebhookVerificationError(str(exc)) from exc

        event_type = str(_field(event, "type") or "")
        data_object = _field(_field(event, "data"), "object")

        if event_type == "checkout.session.completed":
            metadata = _field(data_object, "metadata")
            return StripeWebhookEvent(
                event_type=event_type,
                checkout_completed=StripeCheckoutCompletedEventData(
                    user_id=_field(data_object, "client_reference_id") or _field(metadata, USER_ID_METADATA_KEY),
                    customer_id=_field(data_object, "customer"),
                    amount_total=_field(data_object, "amount_total"),
                    currency=_field(data_object, "currency"),
                ),
            )

        if event_type == "customer.subscription.deleted":
            return StripeWebhookEvent(
                event_type=event_type,
                subscription_deleted=StripeSubscriptionDeletedEventData(
                    subscription_id=_field(data_object, "id"),
                    customer_id=_field(data_object, "customer"),
                ),
            )

        return StripeWebhookEvent(event_type=event_type)


def _field(obj, key: str):
    # Signed payloads can still carry lists or scalars where objects are expected.
    try:
        return obj[key]
    except (KeyError, TypeError, IndexError):
        return None


def _session_result(session, *, what: str) -> StripeSessionResult:
    session_id = getattr(session, "id", None)
    session_url = getattr(session, "url", None)
    if not session_id or not session_url:
        raise PaymentProviderError(f"Stripe {what} response is incomplete.")
    return StripeSessionResult(id=str(session_id), url=str(session_url))


def _first_customer_id(customers: list) -> str | None:
    if not customers:
        return None
    customer_id = getattr(customers[0], "id", None)
    return str(customer_id) if customer_id else None
