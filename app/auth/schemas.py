"""Auth domain schemas.

Request and response schemas for password accounts and profile edits.
"""

from pydantic import EmailStr, Field

from app.core.schemas import CamelModel
from app.core.security import BCRYPT_MAX_PASSWORD_BYTES
from app.user.schemas import UserSummary


class SignupRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=BCRYPT_MAX_PASSWORD_BYTES)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(max_length=BCRYPT_MAX_PASSWORD_BYTES)


class LoginUser(CamelModel):
    name: str
    email: str | None


class LoginResponse(CamelModel):
    token: str
    user: LoginUser


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1, max_length=64)
    new_password: str = Field(min_length=8, max_length=BCRYPT_MAX_PASSWORD_BYTES)


class ProfileUpdateRequest(CamelModel):
    """Fields the account owner may change; omitted fields stay as they are.

    Mobile format is checked by the service (``+91`` and 10 digits).
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    mobile: str | None = Field(default=None, max_length=20)


class TokenUserResponse(CamelModel):
    """Response for flows that (re-)issue a token."""

    message: str
    token: str
    user: UserSummary
