"""
Custom exception classes for the application.

Every exception carries the HTTP status it maps to; `create_app` turns them
into the `{"error": message}` envelope.
"""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class AuthenticationError(AppException):
    """Raised when no authenticated principal is available."""

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHENTICATED",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ForbiddenError(AppException):
    """Raised when a principal acts on a resource claimed by someone else."""

    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "FORBIDDEN", details)


class ValidationError(AppException):
    """Raised when required input is missing (distinct from pydantic ValidationError)."""

    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(AppException):
    """Raised when a record addressed by id does not exist."""

    status_code = 404

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "NOT_FOUND", details)


class NotConfiguredError(AppException):
    """Raised when a structurally required credential or URL is missing."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "NOT_CONFIGURED", details)


class ProviderError(AppException):
    """Raised when an external provider (calling, messaging, push) rejects a request.

    The message is the provider's raw error text.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        provider: str,
        provider_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            "PROVIDER_ERROR",
            {"provider": provider, "provider_status": provider_status, **(details or {})},
        )
        self.provider = provider
        self.provider_status = provider_status


class StoreError(AppException):
    """Raised when the account/record store fails a read or write."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "STORE_ERROR", details)
