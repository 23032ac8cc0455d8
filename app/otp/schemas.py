"""OTP domain schemas.

Format checks happen in the service so callers get the domain's own
invalid-mobile / invalid-OTP messages rather than generic validation text.
"""

from pydantic import Field

from app.core.schemas import CamelModel
from app.user.schemas import UserSummary


class OTPRequest(CamelModel):
    """10-digit local mobile number, without country code."""

    mobile: str = Field(max_length=20)


class OTPRequestResponse(CamelModel):
    message: str
    mobile: str


class OTPVerifyRequest(CamelModel):
    mobile: str = Field(max_length=20)
    otp: str = Field(max_length=20)
    name: str | None = Field(default=None, max_length=100)


class OTPVerifyResponse(CamelModel):
    message: str
    token: str
    user: UserSummary
