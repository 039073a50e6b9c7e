"""
Pydantic schemas for push endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field


class PushSubscriptionIn(BaseModel):
    """Browser subscription, as produced by PushManager.subscribe()."""

    model_config = ConfigDict(extra="ignore")

    endpoint: str
    keys: dict[str, str] = Field(default_factory=dict)


class SubscribeRequest(BaseModel):
    subscription: PushSubscriptionIn | None = None
    user_id: str | None = None


class SendRequest(BaseModel):
    user_id: str | None = None
    title: str | None = None
    body: str | None = None
    url: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
