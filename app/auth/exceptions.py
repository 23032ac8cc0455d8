"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExpiredError,
    ValidationError,
)


# Authentication errors (401)
class NotAuthenticatedError(AuthenticationError):
    """Raised when no bearer token was presented."""

    error_type = "not_authenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password combination is invalid."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is malformed, tampered, expired or revoked."""

    error_type = "invalid_token"

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


# Authorization errors (403)
class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)


# Validation errors (400) - password reset
class ResetTokenInvalidError(ValidationError):
    """Raised when a password reset token matches no account."""

    error_type = "reset_token_invalid"

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)


class ResetTokenExpiredError(ExpiredError):
    """Raised when a password reset token is past its expiry."""

    error_type = "reset_token_expired"

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)
