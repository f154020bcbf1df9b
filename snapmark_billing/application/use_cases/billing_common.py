from __future__ import annotations

from datetime import datetime, timezone

from snapmark_billing.domain.exceptions import BillingInputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_user_id(user_id: str | None) -> str:
    if not user_id:
        raise BillingInputError("User ID required")
    return user_id
