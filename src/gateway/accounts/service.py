"""
Identity resolution: map an authenticated principal to exactly one tenant.
"""

from dataclasses import dataclass

from gateway.accounts.models import TeamMembership, TenantAccount
from gateway.accounts.repository import AccountRepositoryProtocol
from gateway.auth.middleware import Principal
from gateway.shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedIdentity:
    """Outcome of identity resolution.

    Both fields are None when the principal has no accessible account; that
    is a normal result, not an error.
    """

    tenant: TenantAccount | None = None
    membership: TeamMembership | None = None

    @property
    def is_delegated(self) -> bool:
        return self.membership is not None


class IdentityResolver:
    """Resolves a principal to a directly owned or delegated tenant account."""

    def __init__(self, repository: AccountRepositoryProtocol) -> None:
        self._repository = repository

    async def resolve(self, principal: Principal) -> ResolvedIdentity:
        """Resolve the tenant a principal acts for.

        Direct ownership wins over team membership. Only the first membership
        returned by the store is consulted.

        Raises:
            StoreError: If the account store cannot be reached.
        """
        tenant = await self._repository.get_tenant_owned_by(principal.id)
        if tenant is not None:
            logger.debug(
                "Principal owns tenant",
                extra={"principal_id": principal.id, "tenant_id": str(tenant.id)},
            )
            return ResolvedIdentity(tenant=tenant)

        membership = await self._repository.get_first_membership(principal.id)
        if membership is None:
            logger.info("Principal has no accessible tenant", extra={"principal_id": principal.id})
            return ResolvedIdentity()

        parent = await self._repository.get_tenant(membership.client_id)
        if parent is None:
            logger.warning(
                "Team membership references a missing tenant",
                extra={
                    "principal_id": principal.id,
                    "membership_id": str(membership.id),
                    "tenant_id": str(membership.client_id),
                },
            )
            return ResolvedIdentity()

        return ResolvedIdentity(tenant=parent, membership=membership)
