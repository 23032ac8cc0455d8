"""Tests for OTP domain router."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from sqlmodel import Session

from app.user.service import get_user_by_mobile


def _stored_code(session: Session, mobile: str) -> str:
    user = get_user_by_mobile(session, mobile)
    session.refresh(user)
    return user.otp


# --- POST /otp/request ---


def test_request_otp_success(
    client: TestClient, session: Session, mock_waha: MagicMock, site_settings
):
    response = client.post("/otp/request", json={"mobile": "9876543210"})

    assert response.status_code == 200
    assert response.json() == {
        "message": "OTP sent successfully to your WhatsApp",
        "mobile": "+919876543210",
    }
    mock_waha.send_text.assert_awaited_once()
    code = _stored_code(session, "+919876543210")
    assert len(code) == 6
    assert code.isdigit()
    assert code[0] != "0"


def test_request_otp_invalid_mobile(client: TestClient, mock_waha: MagicMock):
    response = client.post("/otp/request", json={"mobile": "12345"})

    assert response.status_code == 400
    assert response.json()["type"] == "invalid_mobile"
    mock_waha.send_text.assert_not_called()


def test_request_otp_missing_mobile(client: TestClient):
    response = client.post("/otp/request", json={})

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"


def test_request_otp_not_configured(client: TestClient, mock_waha: MagicMock):
    response = client.post("/otp/request", json={"mobile": "9876543210"})

    assert response.status_code == 500
    assert response.json() == {
        "type": "delivery_failed",
        "message": "Failed to send OTP. Please check WhatsApp configuration.",
    }
    mock_waha.send_text.assert_not_called()


def test_request_otp_send_failure(
    client: TestClient, mock_waha: MagicMock, site_settings
):
    mock_waha.send_text = AsyncMock(return_value=False)

    response = client.post("/otp/request", json={"mobile": "9876543210"})

    assert response.status_code == 500
    assert response.json()["type"] == "delivery_failed"


def test_request_otp_cooldown_sets_retry_after(client: TestClient, site_settings):
    client.post("/otp/request", json={"mobile": "9876543210"})
    response = client.post("/otp/request", json={"mobile": "9876543210"})

    assert response.status_code == 429
    assert response.json()["type"] == "otp_cooldown"
    assert 0 < int(response.headers["Retry-After"]) <= 30


# --- POST /otp/verify ---


def test_verify_otp_success(client: TestClient, session: Session, site_settings):
    client.post("/otp/request", json={"mobile": "9876543210"})
    code = _stored_code(session, "+919876543210")

    response = client.post(
        "/otp/verify",
        json={"mobile": "+919876543210", "otp": code, "name": "Ravi"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["token"]
    assert data["user"]["name"] == "Ravi"
    assert data["user"]["mobile"] == "+919876543210"
    assert data["user"]["isAdmin"] is False
    assert "otp" not in data["user"]


def test_verify_otp_token_authenticates(
    client: TestClient, session: Session, site_settings
):
    client.post("/otp/request", json={"mobile": "9876543210"})
    code = _stored_code(session, "+919876543210")
    token = client.post(
        "/otp/verify", json={"mobile": "+919876543210", "otp": code}
    ).json()["token"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["isVerified"] is True


def test_verify_otp_mismatch(client: TestClient, session: Session, site_settings):
    client.post("/otp/request", json={"mobile": "9876543210"})
    code = _stored_code(session, "+919876543210")
    wrong = "111111" if code != "111111" else "222222"

    response = client.post(
        "/otp/verify", json={"mobile": "+919876543210", "otp": wrong}
    )

    assert response.status_code == 400
    assert response.json() == {"type": "otp_mismatch", "message": "Invalid OTP"}


def test_verify_otp_expired(client: TestClient, session: Session, mobile_user):
    mobile_user.otp = "123456"
    mobile_user.otp_expiry = datetime.now(UTC) - timedelta(seconds=1)
    session.add(mobile_user)
    session.commit()

    response = client.post(
        "/otp/verify", json={"mobile": "+919812345678", "otp": "123456"}
    )

    assert response.status_code == 400
    assert response.json()["type"] == "otp_expired"


def test_verify_otp_unknown_user(client: TestClient):
    response = client.post(
        "/otp/verify", json={"mobile": "+919000000000", "otp": "123456"}
    )

    assert response.status_code == 404
    assert response.json()["type"] == "user_not_found"


def test_verify_otp_bad_code_format(client: TestClient):
    response = client.post(
        "/otp/verify", json={"mobile": "+919876543210", "otp": "12"}
    )

    assert response.status_code == 400
    assert response.json()["type"] == "invalid_otp"
