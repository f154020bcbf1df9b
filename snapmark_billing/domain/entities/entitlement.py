from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EntitlementRecord:
    user_id: str
    is_pro: bool
    customer_ref: str | None
