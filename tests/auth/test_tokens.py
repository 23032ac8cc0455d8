"""Tests for app/auth/tokens.py - bearer token issue and verify."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.auth.exceptions import InvalidTokenError
from app.auth.tokens import TokenClaims, TokenService, get_token_service

SECRET = "unit-test-secret-0123456789"


@pytest.fixture
def service():
    return TokenService(secret_key=SECRET, expires_in=timedelta(days=30))


@pytest.fixture
def claims():
    return TokenClaims(
        user_id=uuid.uuid4(),
        email="a@example.com",
        mobile="+919876543210",
        is_admin=True,
        version=2,
    )


def test_round_trip(service, claims):
    token = service.issue(claims)

    assert service.verify(token) == claims


def test_payload_shape(service, claims):
    now = datetime(2025, 1, 1, tzinfo=UTC)
    token = service.issue(claims, now=now)

    payload = jwt.get_unverified_claims(token)
    assert payload["id"] == str(claims.user_id)
    assert payload["sub"] == str(claims.user_id)
    assert payload["isAdmin"] is True
    assert payload["mobile"] == "+919876543210"
    assert payload["ver"] == 2
    assert payload["exp"] - payload["iat"] == int(timedelta(days=30).total_seconds())


def test_issue_is_deterministic_for_fixed_time(service, claims):
    now = datetime(2025, 1, 1, tzinfo=UTC)

    assert service.issue(claims, now=now) == service.issue(claims, now=now)


def test_custom_ttl(service, claims):
    now = datetime.now(UTC)
    token = service.issue(claims, ttl=timedelta(minutes=1), now=now)

    payload = jwt.get_unverified_claims(token)
    assert payload["exp"] == int((now + timedelta(minutes=1)).timestamp())


def test_expired_token_rejected(service, claims):
    token = service.issue(claims, now=datetime.now(UTC) - timedelta(days=31))

    with pytest.raises(InvalidTokenError) as exc_info:
        service.verify(token)

    assert exc_info.value.status_code == 401


def test_tampered_token_rejected(service, claims):
    header, _, signature = service.issue(claims).split(".")
    demoted = TokenClaims(user_id=claims.user_id, is_admin=False)
    _, other_payload, _ = service.issue(demoted).split(".")
    tampered = f"{header}.{other_payload}.{signature}"

    with pytest.raises(InvalidTokenError):
        service.verify(tampered)


def test_wrong_secret_rejected(service, claims):
    other = TokenService(secret_key="a-completely-different-secret")

    with pytest.raises(InvalidTokenError):
        other.verify(service.issue(claims))


def test_garbage_rejected(service):
    with pytest.raises(InvalidTokenError):
        service.verify("not-a-jwt")


def test_missing_identity_rejected(service):
    token = jwt.encode({"email": "x@example.com"}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_legacy_token_without_version_defaults_to_zero(service):
    user_id = uuid.uuid4()
    token = jwt.encode(
        {"id": str(user_id), "isAdmin": False}, SECRET, algorithm="HS256"
    )

    claims = service.verify(token)

    assert claims.user_id == user_id
    assert claims.version == 0


def test_for_user(test_user):
    claims = TokenClaims.for_user(test_user)

    assert claims.user_id == test_user.id
    assert claims.email == "test@example.com"
    assert claims.is_admin is False
    assert claims.version == 0


def test_get_token_service_uses_settings(settings, claims):
    service = get_token_service(settings)
    token = service.issue(claims, now=datetime(2025, 1, 1, tzinfo=UTC))

    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=["HS256"],
        options={"verify_exp": False},
    )
    assert payload["exp"] - payload["iat"] == settings.token_expires_days * 86400
