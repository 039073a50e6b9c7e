"""
Pydantic schemas for the SMS endpoint.
"""

from pydantic import BaseModel, ConfigDict, Field


class SendSmsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: str | None = None
    text: str | None = None
    from_number: str | None = Field(default=None, alias="from")
    lead_id: str | None = None


class SendSmsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message_id: str | None = Field(default=None, alias="messageId")
