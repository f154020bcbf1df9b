from __future__ import annotations

from dataclasses import dataclass

from snapmark_billing.domain.entities.notification import Notification


@dataclass(frozen=True)
class ProPriceConfig:
    currency: str
    unit_amount: int
    interval: str
    product_name: str
    product_description: str


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    user_id: str | None


@dataclass(frozen=True)
class CreatePortalSessionInput:
    user_id: str | None


@dataclass(frozen=True)
class SessionUrlOutput:
    url: str


@dataclass(frozen=True)
class CancelSubscriptionInput:
    user_id: str | None


@dataclass(frozen=True)
class CancelSubscriptionOutput:
    user_id: str
    notifications: tuple[Notification, ...] = ()


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
    notifications: tuple[Notification, ...] = ()


@dataclass(frozen=True)
class StripeSessionResult:
    id: str
    url: str


@dataclass(frozen=True)
class StripeCheckoutCompletedEventData:
    user_id: str | None
    customer_id: str | None
    amount_total: int | None
    currency: str | None


@dataclass(frozen=True)
class StripeSubscriptionDeletedEventData:
    subscription_id: str | None
    customer_id: str | None


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_type: str
    checkout_completed: StripeCheckoutCompletedEventData | None = None
    subscription_deleted: StripeSubscriptionDeletedEventData | None = None
