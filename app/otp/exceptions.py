"""OTP domain exceptions."""

from app.core.exceptions import (
    AppException,
    ExpiredError,
    RateLimitError,
    ValidationError,
)


class InvalidMobileError(ValidationError):
    """Raised when a mobile number does not match the supported format."""

    error_type = "invalid_mobile"

    def __init__(
        self,
        message: str = "Invalid mobile number. Must be a valid 10-digit Indian number.",
    ):
        super().__init__(message)


class InvalidOTPError(ValidationError):
    """Raised when the submitted code is not 6 characters long."""

    error_type = "invalid_otp"

    def __init__(self, message: str = "Invalid OTP"):
        super().__init__(message)


class OTPExpiredError(ExpiredError):
    """Raised when the code is past its expiry."""

    error_type = "otp_expired"

    def __init__(self, message: str = "OTP expired. Please request a new one."):
        super().__init__(message)


class OTPMismatchError(ValidationError):
    """Raised when the code differs from the outstanding one."""

    error_type = "otp_mismatch"

    def __init__(self, message: str = "Invalid OTP"):
        super().__init__(message)


class OTPCooldownError(RateLimitError):
    """Raised when a new code is requested before the resend cooldown ends."""

    error_type = "otp_cooldown"

    def __init__(
        self,
        message: str = "OTP already sent. Please wait before requesting another.",
        retry_after: int | None = None,
    ):
        super().__init__(message, retry_after=retry_after)


class DeliveryFailedError(AppException):
    """Raised when the code could not be handed to the messaging gateway."""

    status_code = 500
    error_type = "delivery_failed"

    def __init__(
        self,
        message: str = "Failed to send OTP. Please check WhatsApp configuration.",
    ):
        super().__init__(message)
