"""
Push delivery transports.

A transport hands one notification payload to one subscription endpoint.
The default transport only records the intent; encrypted Web Push delivery
plugs in behind the same protocol.
"""

from typing import Any, Protocol

from gateway.push.models import PushSubscription
from gateway.shared.logging import get_logger

logger = get_logger(__name__)


class PushTransport(Protocol):
    async def deliver(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        """Deliver `payload` to the subscription's endpoint."""
        ...


class QueuedPushTransport:
    """Records delivery intent without contacting the endpoint."""

    async def deliver(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        logger.info(
            "Push notification queued",
            extra={
                "user_id": subscription.user_id,
                "subscription_id": str(subscription.id),
                "title": payload.get("title"),
            },
        )
