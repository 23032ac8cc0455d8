"""Gateway connection resolution.

The connection is read from the site settings record on every call so an
operator's edit takes effect on the next request without a restart.
"""

from typing import Protocol

from sqlmodel import Session

from app.core.settings import Settings
from app.gateway.schemas import GatewayConnection
from app.site.service import get_site_settings


class GatewayConfigProvider(Protocol):
    """Source of the gateway connection used for OTP delivery and broadcasts."""

    def get_connection(self) -> GatewayConnection:
        """Return the current connection (possibly incomplete)."""
        ...

    def resolve_api_key(self, override: str | None = None) -> str | None:
        """Pick the access key for a call: explicit override, then configured."""
        ...


class SiteSettingsGatewayConfigProvider:
    """Reads the connection from SiteSettings, falling back to env for the key."""

    def __init__(self, session: Session, settings: Settings):
        self._session = session
        self._settings = settings

    def get_connection(self) -> GatewayConnection:
        record = get_site_settings(self._session)
        if record is None:
            return GatewayConnection(api_key=self._settings.waha_default_api_key)
        return GatewayConnection(
            base_url=record.waha_base_url,
            session_name=record.waha_session_name,
            api_key=record.waha_api_key or self._settings.waha_default_api_key,
        )

    def resolve_api_key(self, override: str | None = None) -> str | None:
        if override:
            return override
        return self.get_connection().api_key
