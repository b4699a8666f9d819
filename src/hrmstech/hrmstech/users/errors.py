"""Map authentication error codes to messages shown to the user."""
from __future__ import annotations

import logging

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIAL = "auth/invalid-credential"
INVALID_EMAIL = "auth/invalid-email"
USER_DISABLED = "auth/user-disabled"
TOO_MANY_REQUESTS = "auth/too-many-requests"
EMAIL_IN_USE = "auth/email-already-in-use"
WEAK_PASSWORD = "auth/weak-password"
OPERATION_NOT_ALLOWED = "auth/operation-not-allowed"
INVALID_ACTION_CODE = "auth/invalid-action-code"
EXPIRED_ACTION_CODE = "auth/expired-action-code"
NO_MEMBERSHIP = "auth/no-membership"

GENERIC_MESSAGE = "Unable to complete this action. Please try again or contact support if the problem persists."

_MESSAGES = {
    INVALID_CREDENTIAL: "Invalid email or password. Please check your credentials and try again.",
    "auth/user-not-found": "Invalid email or password. Please check your credentials and try again.",
    "auth/wrong-password": "Invalid email or password. Please check your credentials and try again.",
    INVALID_EMAIL: "Please enter a valid email address.",
    USER_DISABLED: "This account has been disabled. Please contact support for assistance.",
    TOO_MANY_REQUESTS: "Too many failed attempts. Please wait a few minutes before trying again.",
    EMAIL_IN_USE: "An account with this email already exists. Try signing in instead.",
    WEAK_PASSWORD: "Password is too weak. Please use at least 6 characters with a mix of letters and numbers.",
    OPERATION_NOT_ALLOWED: "Account creation is currently disabled. Please contact support.",
    INVALID_ACTION_CODE: "This reset link is invalid or has expired. Please request a new one.",
    EXPIRED_ACTION_CODE: "This reset link is invalid or has expired. Please request a new one.",
    NO_MEMBERSHIP: "Your account is not linked to any organization yet.",
    "auth/network-request-failed": "Network error. Please check your internet connection and try again.",
    "auth/timeout": "Request timed out. Please try again.",
    "auth/internal-error": "Something went wrong on our end. Please try again later.",
    "auth/invalid-api-key": "Service configuration error. Please contact support.",
    "auth/app-deleted": "Service configuration error. Please contact support.",
}


def auth_error_message(error: BaseException) -> str:
    if not isinstance(error, AuthenticationError):
        return str(error) or "An unexpected error occurred"

    message = _MESSAGES.get(error.code)
    if message is None:
        logger.error("unknown auth error code=%s message=%s", error.code, error)
        return GENERIC_MESSAGE
    return message
