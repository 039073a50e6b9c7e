"""
Push subscription management and notification fan-out.
"""

import hmac
from dataclasses import dataclass, field
from typing import Any

from gateway.auth.middleware import Principal
from gateway.push.repository import PushSubscriptionRepositoryProtocol
from gateway.push.schemas import PushSubscriptionIn
from gateway.push.transport import PushTransport, QueuedPushTransport
from gateway.shared.exceptions import AuthenticationError, ForbiddenError, ValidationError
from gateway.shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_NOTIFICATION_URL = "/portal/dashboard"


@dataclass(frozen=True)
class PushSendResult:
    sent: int
    payload: dict[str, Any] = field(default_factory=dict)


class PushService:
    """Strict self-service subscriptions and secret-guarded delivery."""

    def __init__(
        self,
        repository: PushSubscriptionRepositoryProtocol,
        webhook_secret: str = "",
        transport: PushTransport | None = None,
    ) -> None:
        self._repository = repository
        self._webhook_secret = webhook_secret
        self._transport = transport or QueuedPushTransport()

    async def subscribe(
        self,
        principal: Principal,
        subscription: PushSubscriptionIn | None,
        claimed_owner_id: str | None,
    ) -> None:
        """Register a browser subscription for the calling principal.

        Raises:
            ForbiddenError: If `claimed_owner_id` is not the principal's id.
            ValidationError: If the subscription has no endpoint.
        """
        if claimed_owner_id != principal.id:
            logger.warning(
                "Push subscribe owner mismatch",
                extra={"principal_id": principal.id, "claimed_owner_id": claimed_owner_id},
            )
            raise ForbiddenError()

        if subscription is None or not subscription.endpoint:
            raise ValidationError("Subscription endpoint is required")

        await self._repository.upsert(principal.id, subscription.endpoint, subscription.keys)
        logger.info("Push subscription saved", extra={"user_id": principal.id})

    def authorize_sender(self, authorization: str | None) -> None:
        """Check the sender's bearer secret. Open mode when no secret is configured.

        Raises:
            AuthenticationError: If a secret is configured and the header does not match.
        """
        if not self._webhook_secret:
            return
        expected = f"Bearer {self._webhook_secret}"
        if not hmac.compare_digest((authorization or "").encode(), expected.encode()):
            logger.warning("Push send rejected: bad webhook secret")
            raise AuthenticationError()

    async def send_to_user(
        self,
        user_id: str | None,
        title: str | None,
        body: str | None,
        url: str | None = None,
    ) -> PushSendResult:
        """Fan a notification out to every subscription of `user_id`.

        `sent` counts targeted subscriptions, not confirmed deliveries.

        Raises:
            ValidationError: If `user_id`, `title` or `body` is missing.
        """
        if not user_id or not title or not body:
            raise ValidationError("Missing user_id, title, or body")

        subscriptions = await self._repository.list_for_user(user_id)
        if not subscriptions:
            logger.info("No push subscriptions for user", extra={"user_id": user_id})
            return PushSendResult(sent=0)

        payload = {"title": title, "body": body, "data": {"url": url or DEFAULT_NOTIFICATION_URL}}
        for subscription in subscriptions:
            try:
                await self._transport.deliver(subscription, payload)
            except Exception as e:
                logger.error(
                    "Push delivery failed",
                    extra={"subscription_id": str(subscription.id), "error": str(e)},
                )

        logger.info("Push notification fan-out", extra={"user_id": user_id, "sent": len(subscriptions)})
        echoed = {"title": title, "body": body, "url": url}
        return PushSendResult(
            sent=len(subscriptions),
            payload={key: value for key, value in echoed.items() if value is not None},
        )
