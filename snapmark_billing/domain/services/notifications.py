"""Human-readable alert messages sent to the admin on entitlement changes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from html import escape

from snapmark_billing.domain.entities.notification import Notification


def _render(subject: str, fields: list[tuple[str, str]]) -> Notification:
    rows = "<br>\n".join(
        f"<strong>{escape(label)}:</strong> {escape(value)}" for label, value in fields
    )
    html = (
        f"<h2>{escape(subject)}</h2>\n"
        f"<p>{rows}</p>\n"
        "<hr>\n"
        "<small>SnapMark Backend Notification</small>"
    )
    return Notification(subject=subject, html=html)


def _format_amount(amount_minor: int | None, currency: str | None) -> str:
    if amount_minor is None:
        return "unknown"
    amount = (Decimal(amount_minor) / Decimal(100)).quantize(Decimal("0.01"))
    if currency:
        return f"{amount} {currency.upper()}"
    return str(amount)


def subscription_started(
    *,
    user_id: str,
    customer_ref: str | None,
    amount_minor: int | None,
    currency: str | None,
    at: datetime,
) -> Notification:
    return _render(
        "New SnapMark Pro Subscription!",
        [
            ("User ID", user_id),
            ("Customer ID", customer_ref or "unknown"),
            ("Amount", _format_amount(amount_minor, currency)),
            ("Time", at.isoformat(timespec="seconds")),
        ],
    )


def subscription_cancelled(*, user_id: str, at: datetime) -> Notification:
    return _render(
        "SnapMark Subscription Cancelled",
        [
            ("User ID", user_id),
            ("Time", at.isoformat(timespec="seconds")),
        ],
    )


def subscription_ended(*, user_id: str, customer_ref: str, at: datetime) -> Notification:
    return _render(
        "SnapMark Subscription Ended",
        [
            ("User ID", user_id),
            ("Customer ID", customer_ref),
            ("Time", at.isoformat(timespec="seconds")),
        ],
    )
