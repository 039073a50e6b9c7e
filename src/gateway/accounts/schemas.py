"""
Pydantic schemas for the identity endpoint.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TenantAccountOut(BaseModel):
    """Tenant account as exposed to the portal."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    auth_user_id: str | None = None
    business_name: str
    contact_email: str | None = None
    phone: str | None = None
    created_at: datetime | None = None


class TeamMembershipOut(BaseModel):
    """Team membership as exposed to the portal."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    client_id: UUID
    auth_user_id: str
    email: str | None = None
    role: str
    created_at: datetime | None = None


class MeResponse(BaseModel):
    """Identity resolution response; both fields null means no accessible account."""

    model_config = ConfigDict(populate_by_name=True)

    client: TenantAccountOut | None = None
    team_member: TeamMembershipOut | None = Field(default=None, alias="teamMember")
