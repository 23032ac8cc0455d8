"""User domain models.

SQLModel table definition for User, the credential store record.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from app.core.mixins import TimestampMixin

# Name given to accounts created by an OTP request before the owner
# supplies a real one at verification time.
PLACEHOLDER_NAME = "User"


class AuthMethod(str, Enum):
    """How the account was first established.

    - email: signed up with email and password
    - mobile: created by a WhatsApp OTP request
    """

    email = "email"
    mobile = "mobile"


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password_hash, otp, otp_expiry, otp_requested_at, reset_token and
    reset_token_expiry are internal-only and never exposed in API responses.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(default=PLACEHOLDER_NAME, max_length=100)
    email: str | None = Field(default=None, index=True, unique=True, max_length=255)
    mobile: str | None = Field(default=None, index=True, unique=True, max_length=20)
    password_hash: str | None = Field(default=None, max_length=255)
    auth_method: AuthMethod = Field(default=AuthMethod.email, max_length=10)
    is_verified: bool = Field(default=False)
    is_admin: bool = Field(default=False)
    # Embedded in every token as "ver"; bumping it revokes older tokens.
    credential_version: int = Field(default=0)

    otp: str | None = Field(default=None, max_length=6)
    otp_expiry: datetime | None = Field(default=None)
    otp_requested_at: datetime | None = Field(default=None)

    reset_token: str | None = Field(default=None, index=True, max_length=64)
    reset_token_expiry: datetime | None = Field(default=None)

    @classmethod
    def new_full_account(cls, *, name: str, email: str, password_hash: str) -> "User":
        """Create an email/password account.

        Callers validate name, email and password before hashing; the account
        is considered verified on creation.
        """
        if not name or not email or not password_hash:
            raise ValueError("name, email and password_hash are required")
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            auth_method=AuthMethod.email,
            is_verified=True,
        )

    @classmethod
    def new_provisional_mobile_account(cls, *, mobile: str) -> "User":
        """Create a mobile-only account pending OTP verification.

        Only the mobile number is required; name is a placeholder and
        there is no email or password.
        """
        if not mobile:
            raise ValueError("mobile is required")
        return cls(
            name=PLACEHOLDER_NAME,
            mobile=mobile,
            auth_method=AuthMethod.mobile,
            is_verified=False,
        )

    def set_otp(self, code: str, *, issued_at: datetime, expires_at: datetime) -> None:
        """Replace any outstanding code with a new one."""
        self.otp = code
        self.otp_requested_at = issued_at
        self.otp_expiry = expires_at

    def clear_otp(self) -> None:
        self.otp = None
        self.otp_expiry = None

    def clear_reset_token(self) -> None:
        self.reset_token = None
        self.reset_token_expiry = None
