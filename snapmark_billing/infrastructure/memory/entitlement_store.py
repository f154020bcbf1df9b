"""Process-local entitlement store.

Records are keyed by user id and mirrored by a reverse index from Stripe
customer id to user id. Nothing is persisted: a restart drops every
entitlement until Stripe delivers new events.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from threading import Lock

from snapmark_billing.domain.entities.entitlement import EntitlementRecord


logger = logging.getLogger(__name__)


class InMemoryEntitlementStore:
    def __init__(self):
        self._records: dict[str, EntitlementRecord] = {}
        self._users_by_customer: dict[str, str] = {}
        self._lock = Lock()

    def is_entitled(self, *, user_id: str) -> bool:
        with self._lock:
            record = self._records.get(user_id)
            return record is not None and record.is_pro

    def grant(self, *, user_id: str, customer_ref: str | None = None) -> EntitlementRecord:
        with self._lock:
            record = replace(self._get_or_create(user_id), is_pro=True)
            self._records[user_id] = record
            if customer_ref:
                record = self._link(user_id, customer_ref)
            return record

    def revoke_by_user(self, *, user_id: str) -> EntitlementRecord:
        with self._lock:
            return self._revoke(user_id)

    def revoke_by_customer_ref(self, *, customer_ref: str) -> str | None:
        with self._lock:
            user_id = self._users_by_customer.get(customer_ref)
            if user_id is None:
                return None
            self._revoke(user_id)
            return user_id

    def resolve_customer_ref(self, *, user_id: str) -> str | None:
        with self._lock:
            record = self._records.get(user_id)
            return record.customer_ref if record is not None else None

    def resolve_user_id(self, *, customer_ref: str) -> str | None:
        with self._lock:
            return self._users_by_customer.get(customer_ref)

    def associate(self, *, user_id: str, customer_ref: str) -> EntitlementRecord:
        with self._lock:
            self._records[user_id] = self._get_or_create(user_id)
            return self._link(user_id, customer_ref)

    def pro_user_count(self) -> int:
        with self._lock:
            return sum(1 for record in self._records.values() if record.is_pro)

    def _get_or_create(self, user_id: str) -> EntitlementRecord:
        record = self._records.get(user_id)
        if record is None:
            record = EntitlementRecord(user_id=user_id, is_pro=False, customer_ref=None)
        return record

    def _revoke(self, user_id: str) -> EntitlementRecord:
        record = replace(self._get_or_create(user_id), is_pro=False)
        self._records[user_id] = record
        return record

    def _link(self, user_id: str, customer_ref: str) -> EntitlementRecord:
        """Point user_id and customer_ref at each other, detaching stale pairs.

        Caller must hold the lock and the record for user_id must exist.
        """
        record = self._records[user_id]

        previous_ref = record.customer_ref
        if previous_ref is not None and previous_ref != customer_ref:
            self._users_by_customer.pop(previous_ref, None)

        previous_owner = self._users_by_customer.get(customer_ref)
        if previous_owner is not None and previous_owner != user_id:
            logger.warning(
                "entitlement_store: customer_reassigned customer_ref=%s from_user=%s to_user=%s",
                customer_ref,
                previous_owner,
                user_id,
            )
            owner_record = self._records[previous_owner]
            self._records[previous_owner] = replace(owner_record, customer_ref=None)

        record = replace(record, customer_ref=customer_ref)
        self._records[user_id] = record
        self._users_by_customer[customer_ref] = user_id
        self._check_index(user_id, customer_ref)
        return record

    def _check_index(self, user_id: str, customer_ref: str) -> None:
        if self._records[user_id].customer_ref != customer_ref:
            raise AssertionError(f"record for {user_id!r} does not hold {customer_ref!r}")
        if self._users_by_customer.get(customer_ref) != user_id:
            raise AssertionError(f"reverse index for {customer_ref!r} does not point to {user_id!r}")
