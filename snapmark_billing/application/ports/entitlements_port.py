from __future__ import annotations

from typing import Protocol

from snapmark_billing.domain.entities.entitlement import EntitlementRecord


class EntitlementsPort(Protocol):
    def is_entitled(self, *, user_id: str) -> bool:
        ...

    def grant(self, *, user_id: str, customer_ref: str | None = None) -> EntitlementRecord:
        ...

    def revoke_by_user(self, *, user_id: str) -> EntitlementRecord:
        ...

    def revoke_by_customer_ref(self, *, customer_ref: str) -> str | None:
        ...

    def resolve_customer_ref(self, *, user_id: str) -> str | None:
        ...

    def associate(self, *, user_id: str, customer_ref: str) -> EntitlementRecord:
        ...
