"""Bearer token issuance and verification.

Tokens are self-contained HS256 JWTs. Nothing is stored server-side; the
only revocation mechanism is the per-user credential version carried in the
``ver`` claim and compared against the stored user by the auth dependencies.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any

from fastapi import Depends
from jose import JWTError, jwt

from app.auth.exceptions import InvalidTokenError
from app.core.settings import Settings, get_settings
from app.user.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by a bearer token."""

    user_id: uuid.UUID
    email: str | None = None
    mobile: str | None = None
    is_admin: bool = False
    version: int = 0

    @classmethod
    def for_user(cls, user: User) -> "TokenClaims":
        return cls(
            user_id=user.id,
            email=user.email,
            mobile=user.mobile,
            is_admin=user.is_admin,
            version=user.credential_version,
        )


class TokenService:
    """Sign and verify bearer tokens with a single process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=30),
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(
        self,
        claims: TokenClaims,
        ttl: timedelta | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        """Encode and sign claims.

        Given the same claims and ``now`` the output is identical.
        """
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + (ttl if ttl is not None else self._expires_in)
        payload: dict[str, Any] = {
            "sub": str(claims.user_id),
            "id": str(claims.user_id),
            "email": claims.email,
            "mobile": claims.mobile,
            "isAdmin": claims.is_admin,
            "ver": claims.version,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def issue_for_user(self, user: User) -> str:
        return self.issue(TokenClaims.for_user(user))

    def decode(self, token: str) -> dict[str, Any]:
        """Return the raw verified payload.

        Raises:
            InvalidTokenError: bad signature, malformed token or expired
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise InvalidTokenError() from e

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry and return the claims.

        No revocation list is consulted here.

        Raises:
            InvalidTokenError: bad signature, expired, or missing identity claim
        """
        payload = self.decode(token)
        try:
            user_id = uuid.UUID(str(payload.get("id") or payload["sub"]))
            version = int(payload.get("ver", 0))
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError() from e

        return TokenClaims(
            user_id=user_id,
            email=payload.get("email"),
            mobile=payload.get("mobile"),
            is_admin=bool(payload.get("isAdmin", False)),
            version=version,
        )


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    """FastAPI dependency building the token service from settings."""
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expires_in,
    )


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
