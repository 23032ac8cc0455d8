"""User domain exceptions.

User-related exceptions for not found and conflict scenarios.
"""

from app.core.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when an email is already owned by another account."""

    error_type = "email_exists"

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class MobileExistsError(ConflictError):
    """Raised when a mobile number is already owned by another account."""

    error_type = "mobile_exists"

    def __init__(self, message: str = "Mobile number already in use"):
        super().__init__(message)
