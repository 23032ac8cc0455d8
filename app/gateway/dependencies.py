"""Gateway domain dependencies."""

from typing import Annotated

from fastapi import Depends

from app.core.deps import SessionDep, SettingsDep
from app.gateway.client import WahaClient
from app.gateway.config import GatewayConfigProvider, SiteSettingsGatewayConfigProvider


def get_waha_client() -> WahaClient:
    """WAHA client bound to the shared gateway HTTP client."""
    return WahaClient()


def get_gateway_config_provider(
    session: SessionDep, settings: SettingsDep
) -> GatewayConfigProvider:
    return SiteSettingsGatewayConfigProvider(session, settings)


GatewayClientDep = Annotated[WahaClient, Depends(get_waha_client)]
GatewayConfigDep = Annotated[
    GatewayConfigProvider, Depends(get_gateway_config_provider)
]
