"""
Pydantic schemas for call record endpoints.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CallRecordOut(BaseModel):
    """Call record as returned to the portal."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    client_id: UUID | None = None
    direction: str | None = None
    from_number: str | None = None
    to_number: str | None = None
    status: str | None = None
    duration_seconds: int | None = None
    outcome: str | None = None
    notes: str | None = None
    transcription: str | None = None
    ai_summary: str | None = None
    lead_id: str | None = None
    recording_url: str | None = None
    call_metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("call_metadata", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CallRecordResponse(BaseModel):
    log: CallRecordOut


class DeleteResponse(BaseModel):
    success: bool = True
