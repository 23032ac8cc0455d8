"""Tests for app/auth/dependencies.py - current user and admin guard."""

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session

from app.auth.dependencies import get_admin_user, get_current_user, get_token_claims
from app.auth.exceptions import (
    AdminRequiredError,
    InvalidTokenError,
    NotAuthenticatedError,
)
from app.auth.tokens import TokenClaims
from app.user.exceptions import UserNotFoundError


def bearer(token: str):
    credentials = MagicMock()
    credentials.credentials = token
    return credentials


# --- get_token_claims ---


def test_token_claims_valid(token_service, test_user):
    claims = get_token_claims(
        token_service, bearer(token_service.issue_for_user(test_user))
    )

    assert claims.user_id == test_user.id


def test_token_claims_missing_header(token_service):
    with pytest.raises(NotAuthenticatedError) as exc_info:
        get_token_claims(token_service, None)

    assert exc_info.value.status_code == 401


def test_token_claims_invalid(token_service):
    with pytest.raises(InvalidTokenError) as exc_info:
        get_token_claims(token_service, bearer("garbage"))

    assert exc_info.value.status_code == 401


# --- get_current_user ---


def test_current_user(session: Session, test_user):
    user = get_current_user(session, TokenClaims.for_user(test_user))

    assert user.id == test_user.id


def test_current_user_deleted(session: Session):
    with pytest.raises(UserNotFoundError) as exc_info:
        get_current_user(session, TokenClaims(user_id=uuid.uuid4()))

    assert exc_info.value.status_code == 404


def test_current_user_revoked_token(session: Session, test_user):
    claims = TokenClaims.for_user(test_user)
    test_user.credential_version += 1
    session.add(test_user)
    session.commit()

    with pytest.raises(InvalidTokenError) as exc_info:
        get_current_user(session, claims)

    assert exc_info.value.message == "Token has been revoked"


# --- get_admin_user ---


def test_admin_guard_allows_admin(session: Session, admin_user):
    user = get_admin_user(session, TokenClaims.for_user(admin_user))

    assert user.id == admin_user.id


def test_admin_guard_rejects_non_admin(session: Session, test_user):
    with pytest.raises(AdminRequiredError) as exc_info:
        get_admin_user(session, TokenClaims.for_user(test_user))

    assert exc_info.value.status_code == 403
    assert exc_info.value.error_type == "admin_required"


def test_admin_guard_reads_stored_flag(session: Session, test_user):
    """A token minted with isAdmin=true does not outlive a demotion."""
    claims = TokenClaims(user_id=test_user.id, is_admin=True)

    with pytest.raises(AdminRequiredError):
        get_admin_user(session, claims)


def test_admin_guard_unknown_user(session: Session):
    with pytest.raises(AdminRequiredError):
        get_admin_user(session, TokenClaims(user_id=uuid.uuid4(), is_admin=True))


def test_admin_guard_revoked_token(session: Session, admin_user):
    claims = TokenClaims.for_user(admin_user)
    admin_user.credential_version += 1
    session.add(admin_user)
    session.commit()

    with pytest.raises(InvalidTokenError):
        get_admin_user(session, claims)


# --- Through HTTP ---


def test_admin_route_expired_token(client, admin_user, token_service):
    expired = token_service.issue(
        TokenClaims.for_user(admin_user),
        now=datetime.now(UTC) - timedelta(days=31),
    )

    response = client.get(
        "/admin/users", headers={"Authorization": f"Bearer {expired}"}
    )

    assert response.status_code == 401
    assert response.json()["type"] == "invalid_token"


def test_admin_route_tampered_token(client, user_headers, admin_user, token_service):
    """A regular user's signature glued onto an admin payload."""
    header, _, signature = user_headers["Authorization"].split(".")
    _, admin_payload, _ = token_service.issue_for_user(admin_user).split(".")
    tampered = f"{header}.{admin_payload}.{signature}"

    response = client.get("/admin/users", headers={"Authorization": tampered})

    assert response.status_code == 401


def test_admin_route_non_admin(client, user_headers):
    response = client.get("/admin/users", headers=user_headers)

    assert response.status_code == 403
    assert response.json() == {
        "type": "admin_required",
        "message": "Admin privileges required",
    }


def test_admin_route_admin(client, admin_headers):
    response = client.get("/admin/users", headers=admin_headers)

    assert response.status_code == 200
