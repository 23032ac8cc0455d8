"""Password account and profile flows.

Signup, email/password login, password reset, and self-service profile
edits. Every flow that hands out a token uses the same TokenService and
therefore the same configured lifetime.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session, select

from app.auth.exceptions import (
    InvalidCredentialsError,
    ResetTokenExpiredError,
    ResetTokenInvalidError,
)
from app.auth.tokens import TokenService, TokenServiceDep
from app.core.deps import SessionDep, SettingsDep
from app.core.email import send_password_reset_email
from app.core.mixins import as_utc, utc_now
from app.core.security import generate_reset_token, hash_password, verify_password
from app.core.settings import Settings
from app.otp.exceptions import InvalidMobileError
from app.user.exceptions import EmailExistsError, MobileExistsError
from app.user.mobile import is_valid_profile_mobile
from app.user.models import User
from app.user.service import (
    email_owned_by_other,
    get_user_by_email,
    mobile_owned_by_other,
    save_unique_user,
    save_user,
)

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        session: Session,
        token_service: TokenService,
        settings: Settings,
        *,
        clock: Callable[[], datetime] = utc_now,
        send_reset_email: Callable[[str, str], None] | None = None,
    ):
        self._session = session
        self._token_service = token_service
        self._settings = settings
        self._clock = clock
        self._send_reset_email = send_reset_email or send_password_reset_email

    def signup(self, name: str, email: str, password: str) -> tuple[str, User]:
        """Create an email/password account and log it in.

        Raises:
            EmailExistsError: email already registered
        """
        if get_user_by_email(self._session, email) is not None:
            raise EmailExistsError("User already exists")

        user = User.new_full_account(
            name=name, email=email, password_hash=hash_password(password)
        )
        save_unique_user(self._session, user, email_message="User already exists")
        logger.info("User signed up: %s", user.id)
        return self._token_service.issue_for_user(user), user

    def login(self, email: str, password: str) -> tuple[str, User]:
        """Check email/password and issue a token.

        Unknown email, wrong password and password-less (mobile) accounts
        all produce the same error.
        """
        user = get_user_by_email(self._session, email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return self._token_service.issue_for_user(user), user

    def forgot_password(self, email: str) -> None:
        """Store a reset token and email the link; silent for unknown emails."""
        user = get_user_by_email(self._session, email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = generate_reset_token()
        user.reset_token = token
        user.reset_token_expiry = (
            self._clock() + self._settings.reset_token_expires_in
        )
        save_user(self._session, user)

        try:
            self._send_reset_email(email, token)
        except Exception:
            # Best-effort: the token is stored and the user can ask again.
            logger.warning(
                "Password reset email failed for user %s", user.id, exc_info=True
            )

    def reset_password(self, token: str, new_password: str) -> User:
        """Set a new password using a reset token.

        Bumps the credential version so tokens issued before the reset
        stop working.

        Raises:
            ResetTokenInvalidError: no account holds this token
            ResetTokenExpiredError: token past its expiry
        """
        user = self._session.exec(
            select(User).where(User.reset_token == token)
        ).first()
        if user is None:
            raise ResetTokenInvalidError()
        if user.reset_token_expiry is None or self._clock() > as_utc(
            user.reset_token_expiry
        ):
            raise ResetTokenExpiredError()

        user.password_hash = hash_password(new_password)
        user.clear_reset_token()
        user.credential_version += 1
        save_user(self._session, user)
        logger.info("Password reset for user %s", user.id)
        return user

    def update_profile(
        self,
        user: User,
        *,
        name: str | None = None,
        email: str | None = None,
        mobile: str | None = None,
    ) -> tuple[str, User]:
        """Change the caller's own identity fields and re-issue a token.

        The previous token stays valid until it expires.

        Raises:
            InvalidMobileError: mobile not ``+91`` followed by 10 digits
            EmailExistsError / MobileExistsError: owned by another account
        """
        if mobile is not None and not is_valid_profile_mobile(mobile):
            raise InvalidMobileError("Invalid mobile number format")
        if email is not None and email_owned_by_other(self._session, email, user.id):
            raise EmailExistsError("Email already in use")
        if mobile is not None and mobile_owned_by_other(self._session, mobile, user.id):
            raise MobileExistsError()

        if name:
            user.name = name
        if email is not None:
            user.email = email
        if mobile is not None:
            user.mobile = mobile
        save_unique_user(self._session, user)

        return self._token_service.issue_for_user(user), user


def get_auth_service(
    session: SessionDep,
    token_service: TokenServiceDep,
    settings: SettingsDep,
) -> AuthService:
    return AuthService(session, token_service, settings)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
