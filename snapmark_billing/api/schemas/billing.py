from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserIdRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")


class SessionUrlResponse(BaseModel):
    url: str


class StripeWebhookResponse(BaseModel):
    received: bool


class CancelSubscriptionResponse(BaseModel):
    success: bool
