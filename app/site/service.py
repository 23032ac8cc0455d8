"""Site settings persistence."""

from typing import Any

from sqlmodel import Session

from app.site.models import SITE_SETTINGS_ID, SiteSettings


def get_site_settings(session: Session) -> SiteSettings | None:
    return session.get(SiteSettings, SITE_SETTINGS_ID)


def update_site_settings(session: Session, changes: dict[str, Any]) -> SiteSettings:
    """Upsert the singleton record with the given field changes."""
    record = get_site_settings(session) or SiteSettings(id=SITE_SETTINGS_ID)
    for key, value in changes.items():
        if isinstance(value, str):
            value = value.strip() or None
        setattr(record, key, value)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record
