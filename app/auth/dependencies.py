"""Auth domain dependencies.

Bearer-token authentication and the admin guard for FastAPI routes, plus
type aliases for authenticated user injection.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.auth.exceptions import (
    AdminRequiredError,
    InvalidTokenError,
    NotAuthenticatedError,
)
from app.auth.tokens import TokenClaims, TokenServiceDep
from app.db.engine import get_session
from app.user.exceptions import UserNotFoundError
from app.user.models import User

security = HTTPBearer(auto_error=False)


def get_token_claims(
    token_service: TokenServiceDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> TokenClaims:
    """Extract and verify the ``Authorization: Bearer <token>`` header.

    Raises:
        NotAuthenticatedError: If no bearer token was sent
        InvalidTokenError: If the token is tampered, malformed or expired
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    return token_service.verify(credentials.credentials)


TokenClaimsDep = Annotated[TokenClaims, Depends(get_token_claims)]


def _ensure_current_version(user: User, claims: TokenClaims) -> None:
    if claims.version < user.credential_version:
        raise InvalidTokenError("Token has been revoked")


def get_current_user(
    session: Annotated[Session, Depends(get_session)],
    claims: TokenClaimsDep,
) -> User:
    """Load the user a valid bearer token refers to.

    Raises:
        UserNotFoundError: If the referenced user no longer exists
        InvalidTokenError: If the token predates a credential change
    """
    user = session.get(User, claims.user_id)
    if user is None:
        raise UserNotFoundError()
    _ensure_current_version(user, claims)
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_admin_user(
    session: Annotated[Session, Depends(get_session)],
    claims: TokenClaimsDep,
) -> User:
    """Admin guard: verify the token and require the stored admin flag.

    The admin flag is read from the credential store, not from the token,
    so demoting a user takes effect immediately.

    Raises:
        NotAuthenticatedError / InvalidTokenError: missing, invalid or
            revoked token (401)
        AdminRequiredError: user missing or not an admin (403)
    """
    user = session.get(User, claims.user_id)
    if user is None:
        raise AdminRequiredError()
    _ensure_current_version(user, claims)
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require admin privileges without injecting user into path operation.

    Use as a router-level or endpoint-level dependency:
        router = APIRouter(dependencies=[Depends(require_admin)])

    For endpoints that need the admin user object, use AdminUserDep directly.
    """
    pass  # Admin check already validated by AdminUserDep
