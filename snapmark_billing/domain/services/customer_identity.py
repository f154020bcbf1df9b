from __future__ import annotations


USER_ID_METADATA_KEY = "userId"


def derived_customer_email(*, user_id: str, domain: str) -> str:
    return f"{user_id}@{domain}"


def customer_metadata_query(*, user_id: str) -> str:
    # Stripe search syntax; single quotes inside the value must be escaped.
    escaped = user_id.replace("\\", "\\\\").replace("'", "\\'")
    return f"metadata['{USER_ID_METADATA_KEY}']:'{escaped}'"
