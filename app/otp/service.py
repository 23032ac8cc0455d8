"""WhatsApp OTP issuance and verification.

All state lives on the user record: the outstanding code, its absolute
expiry and the time it was issued. A new request overwrites the previous
code; a successful verification clears it, which is what makes codes
single-use. Expiry is checked lazily at verification time.
"""

import hmac
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.auth.tokens import TokenService, TokenServiceDep
from app.core.deps import SessionDep, SettingsDep
from app.core.logging import mask_mobile
from app.core.mixins import as_utc, utc_now
from app.core.security import generate_numeric_code
from app.core.settings import Settings
from app.gateway.client import WahaClient
from app.gateway.config import GatewayConfigProvider
from app.gateway.dependencies import GatewayClientDep, GatewayConfigDep
from app.otp.exceptions import (
    DeliveryFailedError,
    InvalidMobileError,
    InvalidOTPError,
    OTPCooldownError,
    OTPExpiredError,
    OTPMismatchError,
)
from app.user.exceptions import UserNotFoundError
from app.user.mobile import (
    is_valid_full_mobile,
    is_valid_local_mobile,
    to_full_mobile,
    to_whatsapp_chat_id,
)
from app.user.models import PLACEHOLDER_NAME, User
from app.user.service import get_user_by_mobile, save_user

logger = logging.getLogger(__name__)

OTP_LENGTH = 6


@dataclass(frozen=True)
class OTPRequestResult:
    mobile: str
    expires_at: datetime


@dataclass(frozen=True)
class OTPVerifyResult:
    token: str
    user: User


def build_otp_message(app_name: str, code: str, expires_minutes: int) -> str:
    return (
        f"\U0001f510 Your OTP for {app_name} is: *{code}*\n\n"
        f"This OTP will expire in {expires_minutes} minutes.\n\n"
        "Do not share this OTP with anyone."
    )


class OTPService:
    """Issue codes over WhatsApp and exchange them for bearer tokens."""

    def __init__(
        self,
        session: Session,
        gateway: WahaClient,
        gateway_config: GatewayConfigProvider,
        token_service: TokenService,
        settings: Settings,
        *,
        clock: Callable[[], datetime] = utc_now,
        code_generator: Callable[[], str] = lambda: generate_numeric_code(OTP_LENGTH),
    ):
        self._session = session
        self._gateway = gateway
        self._gateway_config = gateway_config
        self._token_service = token_service
        self._settings = settings
        self._clock = clock
        self._code_generator = code_generator

    def _check_cooldown(self, user: User, now: datetime) -> None:
        cooldown = self._settings.otp_resend_cooldown
        if not cooldown or user.otp_requested_at is None:
            return
        elapsed = now - as_utc(user.otp_requested_at)
        if elapsed < cooldown:
            retry_after = math.ceil((cooldown - elapsed).total_seconds())
            raise OTPCooldownError(
                f"OTP already sent. Please wait {retry_after} seconds before "
                "requesting another.",
                retry_after=retry_after,
            )

    def _store_code(self, full_mobile: str, code: str, now: datetime) -> User:
        """Upsert the user for this mobile with a fresh code.

        A concurrent first request for the same number can win the insert;
        the loser falls back to overwriting that row, so the later write wins.
        """
        expires_at = now + self._settings.otp_expires_in
        user = get_user_by_mobile(self._session, full_mobile)
        if user is not None:
            self._check_cooldown(user, now)
            user.set_otp(code, issued_at=now, expires_at=expires_at)
            return save_user(self._session, user)

        user = User.new_provisional_mobile_account(mobile=full_mobile)
        user.set_otp(code, issued_at=now, expires_at=expires_at)
        try:
            return save_user(self._session, user)
        except IntegrityError:
            self._session.rollback()
            existing = get_user_by_mobile(self._session, full_mobile)
            if existing is None:
                raise
            existing.set_otp(code, issued_at=now, expires_at=expires_at)
            return save_user(self._session, existing)

    def _delivery_failed(self, user: User) -> DeliveryFailedError:
        """Keep the stored code but let the caller ask again straight away."""
        user.otp_requested_at = None
        save_user(self._session, user)
        return DeliveryFailedError()

    async def request_otp(self, mobile: str) -> OTPRequestResult:
        """Generate, store and deliver a code for a 10-digit local number.

        Raises:
            InvalidMobileError: number is not 10 digits starting with 6-9
            OTPCooldownError: previous code was issued too recently
            DeliveryFailedError: gateway not configured or send failed; the
                stored code stays valid and the resend cooldown is not armed
        """
        if not is_valid_local_mobile(mobile):
            raise InvalidMobileError()

        full_mobile = to_full_mobile(mobile)
        now = self._clock()
        code = self._code_generator()
        user = self._store_code(full_mobile, code, now)
        expires_at = as_utc(user.otp_expiry) if user.otp_expiry else now

        connection = self._gateway_config.get_connection()
        if not connection.is_complete:
            logger.error(
                "WhatsApp OTP not configured in site settings",
                extra={"mobile": mask_mobile(full_mobile)},
            )
            raise self._delivery_failed(user)

        sent = await self._gateway.send_text(
            connection.base_url,
            connection.session_name,
            to_whatsapp_chat_id(full_mobile),
            build_otp_message(
                self._settings.app_name, code, self._settings.otp_expires_minutes
            ),
            api_key=connection.api_key,
        )
        if not sent:
            raise self._delivery_failed(user)

        logger.info(
            "OTP sent",
            extra={
                "mobile": mask_mobile(full_mobile),
                "session_name": connection.session_name,
            },
        )
        return OTPRequestResult(mobile=full_mobile, expires_at=expires_at)

    def verify_otp(
        self, mobile: str, code: str, name: str | None = None
    ) -> OTPVerifyResult:
        """Check a submitted code and issue a bearer token.

        A wrong code leaves the outstanding one in place. A consumed code
        (nothing outstanding) is reported as a mismatch.

        Raises:
            InvalidMobileError / InvalidOTPError: malformed input
            UserNotFoundError: no account for this mobile
            OTPExpiredError: code past expiry, or code stored without expiry
            OTPMismatchError: wrong or already-used code
        """
        if not is_valid_full_mobile(mobile):
            raise InvalidMobileError("Invalid mobile number")
        if not code or len(code) != OTP_LENGTH:
            raise InvalidOTPError()

        user = get_user_by_mobile(self._session, mobile)
        if user is None:
            raise UserNotFoundError("User not found. Please request a new OTP.")

        if user.otp is None and user.otp_expiry is None:
            raise OTPMismatchError()

        now = self._clock()
        if user.otp_expiry is None or now > as_utc(user.otp_expiry):
            raise OTPExpiredError()

        if user.otp is None or not hmac.compare_digest(
            user.otp.encode(), code.encode()
        ):
            logger.info("OTP mismatch", extra={"mobile": mask_mobile(mobile)})
            raise OTPMismatchError()

        if name and user.name == PLACEHOLDER_NAME:
            user.name = name
        user.is_verified = True
        user.clear_otp()
        save_user(self._session, user)

        logger.info("OTP verified", extra={"mobile": mask_mobile(mobile)})
        return OTPVerifyResult(
            token=self._token_service.issue_for_user(user),
            user=user,
        )


def get_otp_service(
    session: SessionDep,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
    token_service: TokenServiceDep,
    settings: SettingsDep,
) -> OTPService:
    return OTPService(session, waha, gateway_config, token_service, settings)


OTPServiceDep = Annotated[OTPService, Depends(get_otp_service)]
