"""Site settings domain models.

A single-row table holding operator-editable configuration. Today it carries
the WhatsApp gateway connection used for OTP delivery and broadcasts.
"""

from sqlmodel import Field, SQLModel

from app.core.mixins import TimestampMixin

SITE_SETTINGS_ID = 1


class SiteSettings(TimestampMixin, SQLModel, table=True):
    """Singleton site configuration record (id is always 1)."""

    __tablename__: str = "site_settings"

    id: int = Field(default=SITE_SETTINGS_ID, primary_key=True)
    waha_base_url: str | None = Field(default=None, max_length=255)
    waha_session_name: str | None = Field(default=None, max_length=100)
    waha_api_key: str | None = Field(default=None, max_length=255)
