from __future__ import annotations

import pytest

from snapmark_billing.application.dto.billing import (
    CancelSubscriptionInput,
    CreateCheckoutSessionInput,
    ProPriceConfig,
    StripeSessionResult,
)
from snapmark_billing.application.use_cases.cancel_subscription import CancelSubscriptionUseCase
from snapmark_billing.application.use_cases.check_pro_status import CheckProStatusUseCase
from snapmark_billing.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from snapmark_billing.domain.exceptions import BillingInputError
from snapmark_billing.infrastructure.memory.entitlement_store import InMemoryEntitlementStore


PRICE = ProPriceConfig(
    currency="usd",
    unit_amount=299,
    interval="month",
    product_name="SnapMark Pro",
    product_description="Unlimited screenshots per day",
)


class FakeStripePort:
    def __init__(self):
        self.checkout_calls: list[dict] = []

    def create_checkout_session(self, **kwargs) -> StripeSessionResult:
        self.checkout_calls.append(kwargs)
        return StripeSessionResult(id="cs_test_1", url="https://checkout.stripe.test/cs_test_1")


def _checkout_use_case(stripe_port: FakeStripePort) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        stripe_port=stripe_port,
        price=PRICE,
        frontend_url="https://frontend.test",
        customer_email_domain="snapmark.temp",
    )


def test_checkout_tags_session_with_user_id():
    stripe_port = FakeStripePort()

    output = _checkout_use_case(stripe_port).execute(CreateCheckoutSessionInput(user_id="u1"))

    assert output.url == "https://checkout.stripe.test/cs_test_1"
    call = stripe_port.checkout_calls[0]
    assert call["user_id"] == "u1"
    assert call["price"] == PRICE
    assert call["customer_email"] == "u1@snapmark.temp"
    assert call["success_url"] == "https://frontend.test?success=true&userId=u1"
    assert call["cancel_url"] == "https://frontend.test?cancelled=true"


def test_checkout_requires_user_id():
    stripe_port = FakeStripePort()

    with pytest.raises(BillingInputError):
        _checkout_use_case(stripe_port).execute(CreateCheckoutSessionInput(user_id=None))

    assert stripe_port.checkout_calls == []


def test_cancel_downgrades_without_prior_grant():
    store = InMemoryEntitlementStore()

    output = CancelSubscriptionUseCase(entitlements_port=store).execute(CancelSubscriptionInput(user_id="u1"))

    assert output.user_id == "u1"
    assert store.is_entitled(user_id="u1") is False
    assert "Cancelled" in output.notifications[0].subject


def test_cancel_overrides_pro_status():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1", customer_ref="cus_1")

    CancelSubscriptionUseCase(entitlements_port=store).execute(CancelSubscriptionInput(user_id="u1"))

    assert store.is_entitled(user_id="u1") is False
    assert store.resolve_customer_ref(user_id="u1") == "cus_1"


def test_check_pro_status_reads_store():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1")
    use_case = CheckProStatusUseCase(entitlements_port=store)

    assert use_case.execute(user_id="u1").is_pro is True
    assert use_case.execute(user_id="u2").is_pro is False
