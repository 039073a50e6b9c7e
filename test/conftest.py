"""
Pytest configuration and fixtures for gateway tests.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import gateway.accounts.models  # noqa: F401
import gateway.calls.models  # noqa: F401
import gateway.messaging.models  # noqa: F401
import gateway.push.models  # noqa: F401
from gateway.auth.middleware import Principal
from gateway.config import Settings, get_settings
from gateway.main import create_app
from gateway.shared.database import Base, get_db_session
from gateway.telephony.config import TelephonyConfig, get_telephony_config

TEST_JWT_SECRET = "test-secret-key-for-portal-gateway-tests-0123456789"
PUSH_SECRET = "push-webhook-secret"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests; no .env lookups leak into assertions."""
    return Settings(
        _env_file=None,
        app_env="dev",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_JWT_SECRET,
        jwt_algorithm="HS256",
        jwt_audience="authenticated",
        push_webhook_secret=PUSH_SECRET,
    )


@pytest.fixture
def telephony_config() -> TelephonyConfig:
    """Fully configured providers."""
    return TelephonyConfig(
        _env_file=None,
        vapi_api_key="vapi_test_key",
        vapi_assistant_id="assistant-123",
        vapi_base_url="https://api.vapi.test",
        twilio_account_sid="AC" + "0" * 32,
        twilio_api_key_sid="SK" + "0" * 32,
        twilio_api_key_secret="twilio_test_secret",
        twilio_twiml_app_sid="AP" + "0" * 32,
        twilio_caller_id="",
        telnyx_api_key="KEY_telnyx_test",
        telnyx_phone_number="+18005550100",
        telnyx_base_url="https://api.telnyx.test/v2",
        webhook_base_url="https://portal.example.com",
    )


@pytest.fixture
def unconfigured_telephony() -> TelephonyConfig:
    """No provider credentials at all."""
    return TelephonyConfig(
        _env_file=None,
        vapi_api_key="",
        vapi_assistant_id="",
        twilio_account_sid="",
        twilio_api_key_sid="",
        twilio_api_key_secret="",
        twilio_twiml_app_sid="",
        twilio_caller_id="",
        telnyx_api_key="",
        telnyx_phone_number="",
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def principal() -> Principal:
    return Principal(id="user-owner-1", email="owner@example.com")


@pytest.fixture
def make_token(test_settings: Settings):
    """Factory for principal access tokens signed like the auth provider's."""

    def _make(
        sub: str = "user-owner-1",
        email: str | None = "owner@example.com",
        expires_in: timedelta = timedelta(hours=1),
        secret: str | None = None,
        audience: str = "authenticated",
    ) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {"sub": sub, "aud": audience, "iat": now, "exp": now + expires_in}
        if email:
            payload["email"] = email
        return jwt.encode(payload, secret or test_settings.jwt_secret_key, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def app(test_settings: Settings, telephony_config: TelephonyConfig, db_session: AsyncSession):
    """Application with settings, providers and database overridden."""
    application = create_app()

    async def _session_override() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_telephony_config] = lambda: telephony_config
    application.dependency_overrides[get_db_session] = _session_override
    return application


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
