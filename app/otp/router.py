"""OTP domain router.

Passwordless login: request a code on WhatsApp, then exchange it for a
bearer token.
"""

from fastapi import APIRouter

from app.core.constants import CommonResponses, Routes
from app.otp.schemas import (
    OTPRequest,
    OTPRequestResponse,
    OTPVerifyRequest,
    OTPVerifyResponse,
)
from app.otp.service import OTPServiceDep
from app.user.schemas import UserSummary

router = APIRouter(
    prefix=Routes.OTP.prefix,
    tags=[Routes.OTP.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


@router.post(
    "/request",
    response_model=OTPRequestResponse,
    responses={
        **CommonResponses.TOO_MANY_REQUESTS,
        500: {"description": "OTP could not be delivered"},
    },
)
async def request_otp(payload: OTPRequest, otp_service: OTPServiceDep):
    """Send a 6-digit code to the number's WhatsApp.

    Creates a provisional account on first use.
    """
    result = await otp_service.request_otp(payload.mobile)
    return OTPRequestResponse(
        message="OTP sent successfully to your WhatsApp",
        mobile=result.mobile,
    )


@router.post(
    "/verify",
    response_model=OTPVerifyResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def verify_otp(payload: OTPVerifyRequest, otp_service: OTPServiceDep):
    """Exchange a code for a bearer token; marks the account verified."""
    result = otp_service.verify_otp(payload.mobile, payload.otp, payload.name)
    return OTPVerifyResponse(
        message="Login successful",
        token=result.token,
        user=UserSummary.model_validate(result.user),
    )
