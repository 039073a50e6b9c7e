"""
Account store lookups used by identity resolution.
"""

from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.accounts.models import TeamMembership, TenantAccount
from gateway.shared.exceptions import StoreError


class AccountRepositoryProtocol(Protocol):
    """Protocol for account store lookups."""

    async def get_tenant_owned_by(self, principal_id: str) -> TenantAccount | None:
        """Get the tenant directly owned by a principal."""
        ...

    async def get_first_membership(self, principal_id: str) -> TeamMembership | None:
        """Get one team membership of a principal (unspecified order)."""
        ...

    async def get_tenant(self, tenant_id: UUID) -> TenantAccount | None:
        """Get a tenant by id."""
        ...


class AccountRepository:
    """Repository for tenant account and team membership reads."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def get_tenant_owned_by(self, principal_id: str) -> TenantAccount | None:
        stmt = select(TenantAccount).where(TenantAccount.auth_user_id == principal_id).limit(1)
        return await self._first(stmt)

    async def get_first_membership(self, principal_id: str) -> TeamMembership | None:
        # No ORDER BY: with several memberships the store decides which one wins.
        stmt = select(TeamMembership).where(TeamMembership.auth_user_id == principal_id).limit(1)
        return await self._first(stmt)

    async def get_tenant(self, tenant_id: UUID) -> TenantAccount | None:
        stmt = select(TenantAccount).where(TenantAccount.id == tenant_id)
        return await self._first(stmt)

    async def _first(self, stmt):
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError("Account store lookup failed", {"error": str(e)}) from e
        return result.scalars().first()
