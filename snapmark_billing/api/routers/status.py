from __future__ import annotations

from fastapi import APIRouter, Depends

from snapmark_billing.api.deps import get_check_pro_status_use_case
from snapmark_billing.api.schemas.status import CheckProResponse, ServiceStatusResponse
from snapmark_billing.application.use_cases.check_pro_status import CheckProStatusUseCase
from snapmark_billing.shared.config import get_settings


router = APIRouter()


@router.get("/", response_model=ServiceStatusResponse)
def service_status():
    return ServiceStatusResponse(service=get_settings().service_name, status="running")


@router.get("/check-pro/{user_id}", response_model=CheckProResponse)
def check_pro(
    user_id: str,
    use_case: CheckProStatusUseCase = Depends(get_check_pro_status_use_case),
):
    output = use_case.execute(user_id=user_id)
    return CheckProResponse(is_pro=output.is_pro)
