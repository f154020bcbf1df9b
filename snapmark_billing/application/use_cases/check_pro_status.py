from __future__ import annotations

import logging

from snapmark_billing.application.dto.entitlements import CheckProStatusOutput
from snapmark_billing.application.ports.entitlements_port import EntitlementsPort


logger = logging.getLogger(__name__)


class CheckProStatusUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort):
        self._entitlements_port = entitlements_port

    def execute(self, *, user_id: str) -> CheckProStatusOutput:
        is_pro = self._entitlements_port.is_entitled(user_id=user_id)
        logger.info("check_pro_status: user_id=%s is_pro=%s", user_id, is_pro)
        return CheckProStatusOutput(user_id=user_id, is_pro=is_pro)
