"""Centralized infrastructure dependency type aliases for FastAPI routes.

Domain dependencies live with their domain:
    from app.auth.dependencies import CurrentUserDep, AdminUserDep
    from app.auth.tokens import TokenServiceDep
    from app.gateway.dependencies import GatewayClientDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.settings import Settings, get_settings
from app.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
