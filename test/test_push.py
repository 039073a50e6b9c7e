"""Tests for push subscriptions and notification fan-out."""

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.auth.middleware import Principal
from gateway.push.models import PushSubscription
from gateway.push.repository import PushSubscriptionRepository
from gateway.push.schemas import PushSubscriptionIn
from gateway.push.service import DEFAULT_NOTIFICATION_URL, PushService
from gateway.shared.exceptions import AuthenticationError, ForbiddenError, ValidationError

from conftest import PUSH_SECRET

SUBSCRIPTION = {
    "endpoint": "https://push.example.net/send/abc123",
    "keys": {"p256dh": "BNc-key", "auth": "auth-secret"},
}


class RecordingTransport:
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.deliveries: list[tuple[str, dict]] = []
        self.fail_for = fail_for or set()

    async def deliver(self, subscription: PushSubscription, payload: dict) -> None:
        self.deliveries.append((subscription.endpoint, payload))
        if subscription.endpoint in self.fail_for:
            raise RuntimeError("410 Gone")


async def _count(session: AsyncSession) -> int:
    return (await session.execute(select(func.count()).select_from(PushSubscription))).scalar_one()


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_owner_mismatch_is_forbidden_without_write(
        self,
        db_session: AsyncSession,
        principal: Principal,
    ) -> None:
        service = PushService(PushSubscriptionRepository(db_session))

        with pytest.raises(ForbiddenError):
            await service.subscribe(principal, PushSubscriptionIn(**SUBSCRIPTION), "somebody-else")

        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_missing_endpoint(self, db_session: AsyncSession, principal: Principal) -> None:
        service = PushService(PushSubscriptionRepository(db_session))

        with pytest.raises(ValidationError):
            await service.subscribe(principal, PushSubscriptionIn(endpoint=""), principal.id)

    @pytest.mark.asyncio
    async def test_endpoint_moves_to_latest_subscriber(self, db_session: AsyncSession) -> None:
        service = PushService(PushSubscriptionRepository(db_session))

        await service.subscribe(Principal(id="first"), PushSubscriptionIn(**SUBSCRIPTION), "first")
        await service.subscribe(
            Principal(id="second"),
            PushSubscriptionIn(endpoint=SUBSCRIPTION["endpoint"], keys={"p256dh": "new", "auth": "new"}),
            "second",
        )

        rows = (await db_session.execute(select(PushSubscription))).scalars().all()
        assert len(rows) == 1
        assert rows[0].user_id == "second"
        assert rows[0].keys == {"p256dh": "new", "auth": "new"}


class TestAuthorizeSender:
    def test_open_mode_without_secret(self) -> None:
        PushService(repository=None, webhook_secret="").authorize_sender(None)

    def test_matching_secret(self) -> None:
        PushService(repository=None, webhook_secret="s3cret").authorize_sender("Bearer s3cret")

    @pytest.mark.parametrize("header", [None, "", "Bearer wrong", "s3cret"])
    def test_wrong_secret(self, header) -> None:
        with pytest.raises(AuthenticationError):
            PushService(repository=None, webhook_secret="s3cret").authorize_sender(header)


class TestSendToUser:
    @pytest.mark.asyncio
    async def test_no_subscriptions_sends_nothing(self, db_session: AsyncSession) -> None:
        transport = RecordingTransport()
        service = PushService(PushSubscriptionRepository(db_session), transport=transport)

        result = await service.send_to_user("user-1", "Title", "Body")

        assert result.sent == 0
        assert transport.deliveries == []

    @pytest.mark.asyncio
    async def test_counts_every_subscription(self, db_session: AsyncSession) -> None:
        repository = PushSubscriptionRepository(db_session)
        await repository.upsert("user-1", "https://push.example.net/a", {})
        await repository.upsert("user-1", "https://push.example.net/b", {})
        await repository.upsert("user-2", "https://push.example.net/c", {})
        transport = RecordingTransport(fail_for={"https://push.example.net/a"})
        service = PushService(repository, transport=transport)

        result = await service.send_to_user("user-1", "New lead", "Jane requested a call")

        assert result.sent == 2
        assert len(transport.deliveries) == 2
        _, payload = transport.deliveries[0]
        assert payload == {
            "title": "New lead",
            "body": "Jane requested a call",
            "data": {"url": DEFAULT_NOTIFICATION_URL},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("user_id", "title", "body"), [(None, "t", "b"), ("u", "", "b"), ("u", "t", None)])
    async def test_missing_fields(self, db_session: AsyncSession, user_id, title, body) -> None:
        service = PushService(PushSubscriptionRepository(db_session))

        with pytest.raises(ValidationError):
            await service.send_to_user(user_id, title, body)


class TestPushEndpoints:
    @pytest.mark.asyncio
    async def test_subscribe(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
        db_session: AsyncSession,
    ) -> None:
        response = await async_client.post(
            "/api/portal/push/subscribe",
            json={"subscription": SUBSCRIPTION, "user_id": "user-owner-1"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        assert await _count(db_session) == 1

    @pytest.mark.asyncio
    async def test_subscribe_for_someone_else_is_403(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
        db_session: AsyncSession,
    ) -> None:
        response = await async_client.post(
            "/api/portal/push/subscribe",
            json={"subscription": SUBSCRIPTION, "user_id": "victim"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "Forbidden"}
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_send_requires_secret(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/portal/push/send",
            json={"user_id": "u", "title": "t", "body": "b"},
            headers={"Authorization": "Bearer nope"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_send_with_no_subscriptions(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/portal/push/send",
            json={"user_id": "u", "title": "t", "body": "b"},
            headers={"Authorization": f"Bearer {PUSH_SECRET}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"sent": 0}

    @pytest.mark.asyncio
    async def test_send_queues_payload(self, async_client: AsyncClient, db_session: AsyncSession) -> None:
        await PushSubscriptionRepository(db_session).upsert("user-9", SUBSCRIPTION["endpoint"], SUBSCRIPTION["keys"])

        response = await async_client.post(
            "/api/portal/push/send",
            json={"user_id": "user-9", "title": "Missed call", "body": "(704) 555-1234", "url": "/portal/calls"},
            headers={"Authorization": f"Bearer {PUSH_SECRET}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "sent": 1,
            "message": "Push notification queued",
            "payload": {"title": "Missed call", "body": "(704) 555-1234", "url": "/portal/calls"},
        }

    @pytest.mark.asyncio
    async def test_subscribe_with_malformed_keys_is_400(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
        db_session: AsyncSession,
    ) -> None:
        response = await async_client.post(
            "/api/portal/push/subscribe",
            json={"subscription": {"endpoint": "https://e/1", "keys": ["a", "b"]}, "user_id": "user-owner-1"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "error" in response.json()
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_send_checks_secret_before_body(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/portal/push/send",
            content=b"{not json",
            headers={"Authorization": "Bearer nope", "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_send_with_malformed_body_is_400(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/portal/push/send",
            content=b"{not json",
            headers={"Authorization": f"Bearer {PUSH_SECRET}", "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid request"}

    @pytest.mark.asyncio
    async def test_send_without_url_omits_it_from_payload(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
    ) -> None:
        await PushSubscriptionRepository(db_session).upsert("user-9", SUBSCRIPTION["endpoint"], SUBSCRIPTION["keys"])

        response = await async_client.post(
            "/api/portal/push/send",
            json={"user_id": "user-9", "title": "Missed call", "body": "(704) 555-1234"},
            headers={"Authorization": f"Bearer {PUSH_SECRET}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["payload"] == {"title": "Missed call", "body": "(704) 555-1234"}
