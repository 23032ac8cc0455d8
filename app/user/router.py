"""User domain router.

Admin-only user management: listing, privilege changes and token
revocation. Accounts are never hard-deleted here.
"""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import select

from app.auth.dependencies import AdminUserDep, require_admin
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.core.exceptions import BadRequestError
from app.core.schemas import MessageResponse
from app.user.models import User
from app.user.schemas import AdminUserUpdate, UserEnvelope, UserListResponse, UserRead
from app.user.service import get_user_or_404, save_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.ADMIN_USERS.prefix,
    tags=[Routes.ADMIN_USERS.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=UserListResponse)
async def list_users(session: SessionDep):
    """List all users, newest first."""
    users = session.exec(select(User).order_by(User.created_at.desc())).all()
    return UserListResponse(users=[UserRead.model_validate(u) for u in users])


@router.patch(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_user(
    user_id: uuid.UUID,
    user_update: AdminUserUpdate,
    admin: AdminUserDep,
    session: SessionDep,
):
    """Grant or revoke admin privileges.

    Admins cannot demote themselves, so at least one admin always remains.
    The change applies to the target's existing tokens immediately because
    the admin guard reads the stored flag.
    """
    user = get_user_or_404(session, user_id)
    if user.id == admin.id and not user_update.is_admin:
        raise BadRequestError("You cannot remove your own admin access")

    user.is_admin = user_update.is_admin
    save_user(session, user)
    logger.info(
        "Admin flag for user %s set to %s by %s", user.id, user.is_admin, admin.id
    )
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post(
    "/{user_id}/revoke-tokens",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def revoke_tokens(user_id: uuid.UUID, admin: AdminUserDep, session: SessionDep):
    """Invalidate every token issued to a user so far.

    This will sign the user out from all devices.
    """
    user = get_user_or_404(session, user_id)
    user.credential_version += 1
    save_user(session, user)
    logger.info("Tokens revoked for user %s by %s", user.id, admin.id)
    return MessageResponse(message="All tokens have been revoked")
