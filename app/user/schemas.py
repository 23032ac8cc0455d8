"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- password_hash, OTP and reset-token fields are internal-only and never
  appear in any response schema
- UserSummary is what login and profile flows return alongside a token
"""

import uuid
from datetime import UTC, datetime

from pydantic import field_serializer

from app.core.schemas import CamelModel
from app.user.models import AuthMethod


class UserSummary(CamelModel):
    """Identity fields returned with a freshly issued token."""

    id: uuid.UUID
    name: str
    email: str | None
    mobile: str | None
    is_admin: bool


class UserRead(UserSummary):
    """Full user view for /auth/me and admin listings."""

    auth_method: AuthMethod
    is_verified: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Format datetime as ISO 8601 string in UTC with Z suffix."""
        if value.tzinfo is not None:
            utc_value = value.astimezone(UTC)
        else:
            # Naive datetime - stored as UTC (from TimestampMixin)
            utc_value = value.replace(tzinfo=UTC)

        return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class UserEnvelope(CamelModel):
    user: UserRead


class UserListResponse(CamelModel):
    users: list[UserRead]


class AdminUserUpdate(CamelModel):
    """Schema for an admin toggling another user's privilege flag."""

    is_admin: bool
