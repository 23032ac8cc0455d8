"""Site settings schemas."""

from pydantic import Field

from app.core.schemas import CamelModel


def mask_secret(value: str | None) -> str | None:
    """Show only the last four characters of a secret."""
    if not value:
        return value
    if len(value) <= 4:
        return "*" * len(value)
    return f"{'*' * (len(value) - 4)}{value[-4:]}"


class SiteSettingsRead(CamelModel):
    waha_base_url: str | None = None
    waha_session_name: str | None = None
    waha_api_key: str | None = None
    waha_configured: bool = False


class SiteSettingsUpdate(CamelModel):
    """Partial update; omitted fields keep their current value.

    An empty string clears a field.
    """

    waha_base_url: str | None = Field(default=None, max_length=255)
    waha_session_name: str | None = Field(default=None, max_length=100)
    waha_api_key: str | None = Field(default=None, max_length=255)
