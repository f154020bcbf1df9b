from __future__ import annotations

import pytest

from snapmark_billing.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeSubscriptionDeletedEventData,
    StripeWebhookEvent,
    StripeWebhookInput,
)
from snapmark_billing.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from snapmark_billing.domain.exceptions import WebhookVerificationError
from snapmark_billing.infrastructure.memory.entitlement_store import InMemoryEntitlementStore


class FakeStripePort:
    def __init__(self, event: StripeWebhookEvent | None = None, *, fail: bool = False):
        self.event = event
        self.fail = fail
        self.calls: list[tuple[str | None, bytes]] = []

    def verify_webhook(self, *, signature: str | None, payload: bytes) -> StripeWebhookEvent:
        self.calls.append((signature, payload))
        if self.fail:
            raise WebhookVerificationError("No signatures found matching the expected signature for payload")
        assert self.event is not None
        return self.event


def _checkout_event(user_id: str | None, customer_id: str | None = "cus_1") -> StripeWebhookEvent:
    return StripeWebhookEvent(
        event_type="checkout.session.completed",
        checkout_completed=StripeCheckoutCompletedEventData(
            user_id=user_id,
            customer_id=customer_id,
            amount_total=299,
            currency="usd",
        ),
    )


def _deleted_event(customer_id: str | None) -> StripeWebhookEvent:
    return StripeWebhookEvent(
        event_type="customer.subscription.deleted",
        subscription_deleted=StripeSubscriptionDeletedEventData(
            subscription_id="sub_1",
            customer_id=customer_id,
        ),
    )


def _run(store: InMemoryEntitlementStore, stripe_port: FakeStripePort):
    use_case = ProcessStripeWebhookUseCase(entitlements_port=store, stripe_port=stripe_port)
    return use_case.execute(StripeWebhookInput(signature="t=1,v1=abc", payload=b"{}"))


def test_checkout_completed_upgrades_user():
    store = InMemoryEntitlementStore()

    output = _run(store, FakeStripePort(_checkout_event("u1")))

    assert output.handled is True
    assert store.is_entitled(user_id="u1") is True
    assert store.resolve_customer_ref(user_id="u1") == "cus_1"
    assert len(output.notifications) == 1
    assert "New SnapMark Pro Subscription" in output.notifications[0].subject
    assert "2.99 USD" in output.notifications[0].html


def test_checkout_completed_without_customer_still_upgrades():
    store = InMemoryEntitlementStore()

    output = _run(store, FakeStripePort(_checkout_event("u1", customer_id=None)))

    assert output.handled is True
    assert store.is_entitled(user_id="u1") is True
    assert store.resolve_customer_ref(user_id="u1") is None


def test_checkout_completed_without_user_id_is_dropped():
    store = InMemoryEntitlementStore()

    output = _run(store, FakeStripePort(_checkout_event(None)))

    assert output.handled is False
    assert output.notifications == ()
    assert store.resolve_user_id(customer_ref="cus_1") is None


def test_subscription_deleted_downgrades_known_customer():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1", customer_ref="cus_1")

    output = _run(store, FakeStripePort(_deleted_event("cus_1")))

    assert output.handled is True
    assert store.is_entitled(user_id="u1") is False
    assert "Ended" in output.notifications[0].subject


def test_subscription_deleted_for_unknown_customer_is_noop():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1", customer_ref="cus_1")

    output = _run(store, FakeStripePort(_deleted_event("cus_other")))

    assert output.handled is False
    assert output.notifications == ()
    assert store.is_entitled(user_id="u1") is True


def test_subscription_deleted_without_customer_is_ignored():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1", customer_ref="cus_1")

    output = _run(store, FakeStripePort(_deleted_event(None)))

    assert output.handled is False
    assert store.is_entitled(user_id="u1") is True


def test_unrecognized_event_is_acknowledged_and_ignored():
    store = InMemoryEntitlementStore()

    output = _run(store, FakeStripePort(StripeWebhookEvent(event_type="invoice.paid")))

    assert output.event_type == "invoice.paid"
    assert output.handled is False
    assert store.pro_user_count() == 0


def test_verification_failure_leaves_store_untouched():
    store = InMemoryEntitlementStore()
    store.grant(user_id="u1", customer_ref="cus_1")

    with pytest.raises(WebhookVerificationError):
        _run(store, FakeStripePort(fail=True))

    assert store.is_entitled(user_id="u1") is True
