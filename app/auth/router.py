"""Auth domain router.

Email/password accounts, password reset and self-service profile edits.
Thin HTTP handlers that delegate to AuthService.
"""

from fastapi import APIRouter, status

from app.auth.dependencies import CurrentUserDep
from app.auth.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    LoginUser,
    ProfileUpdateRequest,
    ResetPasswordRequest,
    SignupRequest,
    TokenUserResponse,
)
from app.auth.service import AuthServiceDep
from app.core.constants import CommonResponses, Routes
from app.core.schemas import MessageResponse
from app.user.schemas import UserEnvelope, UserRead, UserSummary

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


@router.post(
    "/signup",
    response_model=TokenUserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def signup(payload: SignupRequest, auth_service: AuthServiceDep):
    """Register with email and password.

    Email format is validated by Pydantic's EmailStr before this code runs.
    """
    token, user = auth_service.signup(payload.name, payload.email, payload.password)
    return TokenUserResponse(
        message="User created successfully",
        token=token,
        user=UserSummary.model_validate(user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def login(payload: LoginRequest, auth_service: AuthServiceDep):
    """Login with email/password and receive a bearer token."""
    token, user = auth_service.login(payload.email, payload.password)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))


@router.get(
    "/me",
    response_model=UserEnvelope,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.NOT_FOUND},
)
async def get_me(user: CurrentUserDep):
    """Get current authenticated user."""
    return UserEnvelope(user=UserRead.model_validate(user))


@router.put(
    "/profile",
    response_model=TokenUserResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.CONFLICT},
)
async def update_profile(
    payload: ProfileUpdateRequest,
    user: CurrentUserDep,
    auth_service: AuthServiceDep,
):
    """Update the caller's name, email or mobile.

    A new token carrying the updated identity is returned; admin status
    cannot be changed here.
    """
    token, user = auth_service.update_profile(
        user, name=payload.name, email=payload.email, mobile=payload.mobile
    )
    return TokenUserResponse(
        message="Profile updated successfully",
        token=token,
        user=UserSummary.model_validate(user),
    )


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(payload: ForgotPasswordRequest, auth_service: AuthServiceDep):
    """Request a password reset email.

    Always returns success to prevent email enumeration attacks.
    """
    auth_service.forgot_password(payload.email)
    return MessageResponse(
        message="If an account with that email exists, a password reset link has been sent"  # noqa: E501
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(payload: ResetPasswordRequest, auth_service: AuthServiceDep):
    """Set a new password using the token from the reset email.

    Tokens issued before the reset stop working.
    """
    auth_service.reset_password(payload.token, payload.new_password)
    return MessageResponse(message="Password reset successful")
