"""App-wide exception hierarchy.

This module provides a unified exception system with automatic HTTP status code
mapping and consistent error response formatting. Domain packages subclass
these bases in their own ``exceptions`` modules:

    invalid input, expired, mismatch   -> ValidationError (400)
    missing or invalid bearer token    -> AuthenticationError (401)
    not an admin                       -> AuthorizationError (403)
    unknown user                       -> NotFoundError (404)
    email / mobile already taken       -> ConflictError (409)
    OTP resend cooldown                -> RateLimitError (429)
    gateway rejected or unreachable    -> ExternalServiceError (502)
    gateway not configured             -> ServiceUnavailableError (503)
    OTP could not be delivered         -> AppException (500)
"""


class AppException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class and define their own
    status_code and error_type for consistent API responses.
    """

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


# Authentication errors (401)
class AuthenticationError(AppException):
    """Base class for authentication failures."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


# Authorization errors (403)
class AuthorizationError(AppException):
    """Base class for authorization failures."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


# Not found errors (404)
class NotFoundError(AppException):
    """Base class for resource not found errors."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


# Conflict errors (409)
class ConflictError(AppException):
    """Base class for resource conflict errors."""

    status_code = 409
    error_type = "conflict"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


# Validation errors (400)
class ValidationError(AppException):
    """Base class for validation errors."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class BadRequestError(ValidationError):
    """Raised for general bad request errors."""

    error_type = "bad_request"

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class ExpiredError(ValidationError):
    """Base class for short-lived credentials used past their validity window."""

    error_type = "expired"

    def __init__(self, message: str = "Credential has expired"):
        super().__init__(message)


# Rate limit errors (429)
class RateLimitError(AppException):
    """Raised when rate limit is exceeded."""

    status_code = 429
    error_type = "rate_limit_exceeded"

    def __init__(
        self,
        message: str = "Too many requests, please try again later",
        retry_after: int | None = None,
    ):
        self.retry_after = retry_after
        super().__init__(message)


# External service errors (502)
class ExternalServiceError(AppException):
    """Base class for external service failures."""

    status_code = 502
    error_type = "external_service_error"

    def __init__(self, message: str = "External service error"):
        super().__init__(message)


# Service unavailable (503)
class ServiceUnavailableError(AppException):
    """Raised when a required collaborator is not configured or reachable."""

    status_code = 503
    error_type = "service_unavailable"

    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message)
