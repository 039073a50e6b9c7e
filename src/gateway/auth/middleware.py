"""
Principal resolution from bearer access tokens.

The auth provider issues HS256 JWTs; `sub` is the principal id. This module
is the gateway's view of the auth collaborator: it answers "who is calling"
with a `Principal` or `None` and never touches the account store.
"""

from __future__ import annotations

from typing import Annotated, Any

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field

from gateway.config import Settings, get_settings
from gateway.shared.exceptions import AuthenticationError
from gateway.shared.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    """An authenticated caller identity."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque principal id (token subject)")
    email: str | None = Field(default=None, description="Principal email, if the token carries one")


class JWTTokenValidator:
    """Validates principal access tokens."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def decode(self, token: str) -> dict[str, Any]:
        """Decode and verify a token.

        Raises:
            jwt.InvalidTokenError: If the token is expired, malformed or wrongly signed.
        """
        audience = self._settings.jwt_audience or None
        return jwt.decode(
            token,
            self._settings.jwt_secret_key,
            algorithms=[self._settings.jwt_algorithm],
            audience=audience,
            options={"verify_aud": audience is not None, "require": ["sub", "exp"]},
        )

    def principal_from_token(self, token: str) -> Principal | None:
        try:
            payload = self.decode(token)
        except jwt.ExpiredSignatureError:
            logger.info("Access token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid access token", extra={"error": str(e)})
            return None

        subject = str(payload.get("sub") or "").strip()
        if not subject:
            return None
        return Principal(id=subject, email=payload.get("email"))


async def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
    settings: Settings = Depends(get_settings),
) -> Principal | None:
    """Return the principal behind the request's bearer token, if any."""
    if credentials is None:
        return None
    principal = JWTTokenValidator(settings).principal_from_token(credentials.credentials)
    if principal is None:
        logger.warning(
            "Rejected access token",
            extra={"endpoint": str(request.url.path), "method": request.method},
        )
    return principal


async def require_principal(
    request: Request,
    principal: Annotated[Principal | None, Depends(get_current_principal)],
) -> Principal:
    """Dependency for identity-scoped endpoints.

    Raises:
        AuthenticationError: If the request carries no valid principal.
    """
    if principal is None:
        logger.warning(
            "Missing authentication credentials",
            extra={
                "endpoint": str(request.url.path),
                "method": request.method,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        raise AuthenticationError()
    return principal


# Dependency aliases
CurrentPrincipalDep = Annotated[Principal, Depends(require_principal)]
