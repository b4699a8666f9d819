from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or auth tokens are rejected.

    ``code`` follows the provider style (``auth/invalid-credential`` ...) so
    that :func:`hrmstech.users.errors.auth_error_message` can map it.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or code)
        self.code = code


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a scoped record does not exist."""


class EmailDeliveryError(DomainError):
    """Raised when the transactional email provider refuses a message."""
