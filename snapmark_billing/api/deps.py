from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from snapmark_billing.application.ports.notification_port import NotificationPort
from snapmark_billing.application.use_cases.cancel_subscription import CancelSubscriptionUseCase
from snapmark_billing.application.use_cases.check_pro_status import CheckProStatusUseCase
from snapmark_billing.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from snapmark_billing.application.use_cases.create_portal_session import CreatePortalSessionUseCase
from snapmark_billing.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from snapmark_billing.domain.exceptions import ConfigurationError
from snapmark_billing.infrastructure.clients.resend_client import ResendClient
from snapmark_billing.infrastructure.clients.stripe_client import StripeClient
from snapmark_billing.infrastructure.memory.entitlement_store import InMemoryEntitlementStore
from snapmark_billing.shared.config import get_settings, require_stripe_secret


@lru_cache(maxsize=1)
def get_entitlement_store() -> InMemoryEntitlementStore:
    return InMemoryEntitlementStore()


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripeClient:
    settings = get_settings()
    try:
        secret_key = require_stripe_secret(settings)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return StripeClient(
        secret_key=secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


@lru_cache(maxsize=1)
def get_notifier() -> NotificationPort:
    settings = get_settings()
    return ResendClient(
        api_key=settings.resend_api_key,
        to_address=settings.admin_email,
        from_address=settings.notification_from,
        api_base=settings.resend_api_base,
        timeout_seconds=settings.resend_timeout_seconds,
    )


def get_check_pro_status_use_case() -> CheckProStatusUseCase:
    return CheckProStatusUseCase(entitlements_port=get_entitlement_store())


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    settings = get_settings()
    return CreateCheckoutSessionUseCase(
        stripe_port=_get_stripe_client(),
        price=settings.pro_price,
        frontend_url=settings.frontend_url,
        customer_email_domain=settings.customer_email_domain,
    )


def get_create_portal_session_use_case() -> CreatePortalSessionUseCase:
    settings = get_settings()
    return CreatePortalSessionUseCase(
        entitlements_port=get_entitlement_store(),
        stripe_port=_get_stripe_client(),
        frontend_url=settings.frontend_url,
        customer_email_domain=settings.customer_email_domain,
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        entitlements_port=get_entitlement_store(),
        stripe_port=_get_stripe_client(),
    )


def get_cancel_subscription_use_case() -> CancelSubscriptionUseCase:
    return CancelSubscriptionUseCase(entitlements_port=get_entitlement_store())
