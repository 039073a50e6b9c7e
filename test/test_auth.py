"""Tests for principal extraction from bearer tokens."""

from datetime import timedelta

import pytest
from fastapi import status
from httpx import AsyncClient

from gateway.auth.middleware import JWTTokenValidator
from gateway.config import Settings


class TestJWTTokenValidator:
    def test_valid_token(self, test_settings: Settings, make_token) -> None:
        principal = JWTTokenValidator(test_settings).principal_from_token(make_token(sub="abc"))

        assert principal is not None
        assert principal.id == "abc"
        assert principal.email == "owner@example.com"

    def test_expired_token(self, test_settings: Settings, make_token) -> None:
        token = make_token(expires_in=timedelta(minutes=-5))
        assert JWTTokenValidator(test_settings).principal_from_token(token) is None

    def test_wrong_signature(self, test_settings: Settings, make_token) -> None:
        token = make_token(secret="another-secret-that-is-long-enough-0123456789")
        assert JWTTokenValidator(test_settings).principal_from_token(token) is None

    def test_wrong_audience(self, test_settings: Settings, make_token) -> None:
        token = make_token(audience="service_role")
        assert JWTTokenValidator(test_settings).principal_from_token(token) is None

    def test_audience_check_can_be_disabled(self, test_settings: Settings, make_token) -> None:
        settings = test_settings.model_copy(update={"jwt_audience": ""})
        token = make_token(audience="anything")
        assert JWTTokenValidator(settings).principal_from_token(token) is not None

    def test_garbage(self, test_settings: Settings) -> None:
        assert JWTTokenValidator(test_settings).principal_from_token("not-a-jwt") is None


class TestRequirePrincipal:
    @pytest.mark.asyncio
    async def test_missing_header(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/portal/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_expired_token(self, async_client: AsyncClient, make_token) -> None:
        token = make_token(expires_in=timedelta(seconds=-1))

        response = await async_client.get("/api/portal/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
