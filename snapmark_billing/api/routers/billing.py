from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request

from snapmark_billing.api.deps import (
    get_cancel_subscription_use_case,
    get_create_checkout_session_use_case,
    get_create_portal_session_use_case,
    get_notifier,
    get_process_stripe_webhook_use_case,
)
from snapmark_billing.api.schemas.billing import (
    CancelSubscriptionResponse,
    SessionUrlResponse,
    StripeWebhookResponse,
    UserIdRequest,
)
from snapmark_billing.application.dto.billing import (
    CancelSubscriptionInput,
    CreateCheckoutSessionInput,
    CreatePortalSessionInput,
    StripeWebhookInput,
)
from snapmark_billing.application.ports.notification_port import NotificationPort
from snapmark_billing.application.use_cases.cancel_subscription import CancelSubscriptionUseCase
from snapmark_billing.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from snapmark_billing.application.use_cases.create_portal_session import CreatePortalSessionUseCase
from snapmark_billing.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from snapmark_billing.domain.entities.notification import Notification
from snapmark_billing.domain.exceptions import (
    BillingInputError,
    CustomerNotFoundError,
    PaymentProviderError,
    WebhookVerificationError,
)


router = APIRouter()


def _schedule(
    background_tasks: BackgroundTasks,
    notifier: NotificationPort,
    notifications: tuple[Notification, ...],
) -> None:
    for notification in notifications:
        background_tasks.add_task(notifier.send, notification)


@router.post("/create-checkout", response_model=SessionUrlResponse)
def create_checkout(
    req: UserIdRequest,
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    try:
        output = use_case.execute(CreateCheckoutSessionInput(user_id=req.user_id))
    except BillingInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PaymentProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return SessionUrlResponse(url=output.url)


@router.post("/create-portal-session", response_model=SessionUrlResponse)
def create_portal_session(
    req: UserIdRequest,
    use_case: CreatePortalSessionUseCase = Depends(get_create_portal_session_use_case),
):
    try:
        output = use_case.execute(CreatePortalSessionInput(user_id=req.user_id))
    except BillingInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PaymentProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return SessionUrlResponse(url=output.url)


@router.post("/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
    notifier: NotificationPort = Depends(get_notifier),
):
    # Signature is computed over the exact bytes, so the body is never parsed here.
    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except WebhookVerificationError as exc:
        raise HTTPException(status_code=400, detail=f"Webhook Error: {exc}") from exc

    _schedule(background_tasks, notifier, output.notifications)
    return StripeWebhookResponse(received=True)


@router.post("/cancel-subscription", response_model=CancelSubscriptionResponse)
def cancel_subscription(
    req: UserIdRequest,
    background_tasks: BackgroundTasks,
    use_case: CancelSubscriptionUseCase = Depends(get_cancel_subscription_use_case),
    notifier: NotificationPort = Depends(get_notifier),
):
    try:
        output = use_case.execute(CancelSubscriptionInput(user_id=req.user_id))
    except BillingInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    _schedule(background_tasks, notifier, output.notifications)
    return CancelSubscriptionResponse(success=True)
