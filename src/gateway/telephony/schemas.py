"""
Pydantic schemas for call-control endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field


class TriggerCallRequest(BaseModel):
    """Outbound call request from the site's call-me-back form."""

    model_config = ConfigDict(populate_by_name=True)

    phone: str | None = None
    name: str | None = None
    project_type: str | None = Field(default=None, alias="projectType")


class TriggerCallResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    call_id: str | None = Field(default=None, alias="callId")
    message: str | None = None


class VoiceTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    configured: bool = True
    caller_id: str | None = Field(default=None, alias="callerId")
