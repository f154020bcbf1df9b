from __future__ import annotations

import hashlib
import hmac
import json
import time


WEBHOOK_SECRET = "whsec_test_secret"


def sign_payload(payload: bytes, *, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def event_payload(event_type: str, data_object: dict) -> bytes:
    return json.dumps(
        {
            "id": "evt_test_1",
            "object": "event",
            "type": event_type,
            "data": {"object": data_object},
        }
    ).encode("utf-8")


def checkout_completed_payload(user_id: str, customer_id: str) -> bytes:
    return event_payload(
        "checkout.session.completed",
        {
            "id": "cs_test_1",
            "object": "checkout.session",
            "client_reference_id": user_id,
            "customer": customer_id,
            "amount_total": 299,
            "currency": "usd",
            "metadata": {"userId": user_id},
        },
    )


def subscription_deleted_payload(customer_id: str) -> bytes:
    return event_payload(
        "customer.subscription.deleted",
        {
            "id": "sub_test_1",
            "object": "subscription",
            "customer": customer_id,
            "status": "canceled",
        },
    )
