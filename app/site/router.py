"""Site settings router.

Admin-only read and update of the gateway connection used for OTP delivery.
The access key is never returned in full.
"""

from fastapi import APIRouter, Depends

from app.auth.dependencies import require_admin
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.site.models import SiteSettings
from app.site.schemas import SiteSettingsRead, SiteSettingsUpdate, mask_secret
from app.site.service import get_site_settings, update_site_settings

router = APIRouter(
    prefix=Routes.ADMIN_SETTINGS.prefix,
    tags=[Routes.ADMIN_SETTINGS.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


def _to_read(record: SiteSettings | None) -> SiteSettingsRead:
    if record is None:
        return SiteSettingsRead()
    return SiteSettingsRead(
        waha_base_url=record.waha_base_url,
        waha_session_name=record.waha_session_name,
        waha_api_key=mask_secret(record.waha_api_key),
        waha_configured=bool(record.waha_base_url and record.waha_session_name),
    )


@router.get("", response_model=SiteSettingsRead)
async def read_settings(session: SessionDep):
    """Current gateway configuration; empty until first saved."""
    return _to_read(get_site_settings(session))


@router.put(
    "",
    response_model=SiteSettingsRead,
    responses={**CommonResponses.BAD_REQUEST},
)
async def write_settings(payload: SiteSettingsUpdate, session: SessionDep):
    """Update any subset of the gateway fields.

    Takes effect on the next OTP request; no restart needed.
    """
    record = update_site_settings(session, payload.model_dump(exclude_unset=True))
    return _to_read(record)
