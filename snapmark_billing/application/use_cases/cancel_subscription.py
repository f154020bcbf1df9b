from __future__ import annotations

import logging

from snapmark_billing.application.dto.billing import CancelSubscriptionInput, CancelSubscriptionOutput
from snapmark_billing.application.ports.entitlements_port import EntitlementsPort
from snapmark_billing.domain.services import notifications

from .billing_common import require_user_id, utcnow


logger = logging.getLogger(__name__)


class CancelSubscriptionUseCase:
    """Downgrade a user locally without asking Stripe.

    The Stripe subscription keeps running until the customer cancels it in
    the portal; the next verified webhook brings local state back in line.
    """

    def __init__(self, *, entitlements_port: EntitlementsPort):
        self._entitlements_port = entitlements_port

    def execute(self, command: CancelSubscriptionInput) -> CancelSubscriptionOutput:
        user_id = require_user_id(command.user_id)
        self._entitlements_port.revoke_by_user(user_id=user_id)
        logger.info("cancel_subscription: downgraded user_id=%s", user_id)
        return CancelSubscriptionOutput(
            user_id=user_id,
            notifications=(notifications.subscription_cancelled(user_id=user_id, at=utcnow()),),
        )
