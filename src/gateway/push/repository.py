"""
Push subscription store operations.
"""

from datetime import datetime, timezone
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.push.models import PushSubscription
from gateway.shared.exceptions import StoreError


class PushSubscriptionRepositoryProtocol(Protocol):
    """Protocol for push subscription storage."""

    async def upsert(self, user_id: str, endpoint: str, keys: dict[str, Any]) -> PushSubscription:
        """Insert or overwrite the subscription for an endpoint."""
        ...

    async def list_for_user(self, user_id: str) -> list[PushSubscription]:
        """All subscriptions owned by a user."""
        ...


class PushSubscriptionRepository:
    """Repository for push subscriptions, keyed by endpoint."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_endpoint(self, endpoint: str) -> PushSubscription | None:
        result = await self._session.execute(
            select(PushSubscription).where(PushSubscription.endpoint == endpoint)
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: str, endpoint: str, keys: dict[str, Any]) -> PushSubscription:
        """Write the subscription; an existing row for the endpoint is taken over.

        Raises:
            StoreError: If the write fails.
        """
        try:
            try:
                subscription = await self._write(user_id, endpoint, keys)
            except IntegrityError:
                # Another request inserted the same endpoint first; overwrite it.
                await self._session.rollback()
                subscription = await self._write(user_id, endpoint, keys)
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreError("Push subscription write failed", {"error": str(e)}) from e
        return subscription

    async def _write(self, user_id: str, endpoint: str, keys: dict[str, Any]) -> PushSubscription:
        subscription = await self.get_by_endpoint(endpoint)
        if subscription is None:
            subscription = PushSubscription(endpoint=endpoint)
            self._session.add(subscription)
        subscription.user_id = user_id
        subscription.keys = dict(keys)
        subscription.created_at = datetime.now(timezone.utc)
        await self._session.commit()
        return subscription

    async def list_for_user(self, user_id: str) -> list[PushSubscription]:
        try:
            result = await self._session.execute(
                select(PushSubscription).where(PushSubscription.user_id == user_id)
            )
        except SQLAlchemyError as e:
            raise StoreError("Push subscription lookup failed", {"error": str(e)}) from e
        return list(result.scalars().all())
