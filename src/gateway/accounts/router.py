"""
Portal identity endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.accounts.repository import AccountRepository
from gateway.accounts.schemas import MeResponse, TeamMembershipOut, TenantAccountOut
from gateway.accounts.service import IdentityResolver
from gateway.auth.middleware import CurrentPrincipalDep
from gateway.shared.database import get_db_session

router = APIRouter(prefix="/api/portal", tags=["portal"])


def get_identity_resolver(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> IdentityResolver:
    """Dependency for the identity resolver."""
    return IdentityResolver(AccountRepository(session))


@router.get("/me", response_model=MeResponse, response_model_by_alias=True)
async def get_me(
    principal: CurrentPrincipalDep,
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> MeResponse:
    """Return the tenant account the caller acts for, and the membership if delegated."""
    identity = await resolver.resolve(principal)
    return MeResponse(
        client=TenantAccountOut.model_validate(identity.tenant) if identity.tenant else None,
        team_member=(
            TeamMembershipOut.model_validate(identity.membership) if identity.membership else None
        ),
    )
