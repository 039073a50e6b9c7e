"""
Authentication: principal extraction from bearer tokens.
"""

from gateway.auth.middleware import (
    CurrentPrincipalDep,
    JWTTokenValidator,
    Principal,
    get_current_principal,
    require_principal,
)

__all__ = [
    "CurrentPrincipalDep",
    "JWTTokenValidator",
    "Principal",
    "get_current_principal",
    "require_principal",
]
