from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServiceStatusResponse(BaseModel):
    service: str
    status: str


class CheckProResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_pro: bool = Field(..., alias="isPro")
