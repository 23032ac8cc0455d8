"""Tests for app/core/email.py - password reset email."""

from unittest.mock import patch

from app.core.email import build_reset_url, init_resend, send_password_reset_email
from app.core.settings import get_settings


def test_init_resend_without_key_leaves_resend_untouched():
    with (
        patch("app.core.email.get_settings") as mock_settings,
        patch("app.core.email.resend") as mock_resend,
    ):
        mock_settings.return_value.resend_api_key = None
        mock_resend.api_key = "unchanged"

        init_resend()

        assert mock_resend.api_key == "unchanged"


def test_init_resend_with_key():
    with (
        patch("app.core.email.get_settings") as mock_settings,
        patch("app.core.email.resend") as mock_resend,
    ):
        mock_settings.return_value.resend_api_key = "re_test"

        init_resend()

        assert mock_resend.api_key == "re_test"


def test_build_reset_url():
    settings = get_settings()

    url = build_reset_url("abc123")

    assert url == f"{settings.client_url}/reset-password?token=abc123"


def test_send_password_reset_email():
    settings = get_settings()

    with patch("app.core.email.resend.Emails.send") as mock_send:
        send_password_reset_email("user@example.com", "tok-42")

        mock_send.assert_called_once()
        call_args = mock_send.call_args[0][0]
        assert call_args["from"] == f"noreply@{settings.app_domain}"
        assert call_args["to"] == "user@example.com"
        assert settings.app_name in call_args["subject"]
        assert "reset-password?token=tok-42" in call_args["html"]
        assert f"{settings.reset_token_expires_minutes} minutes" in call_args["html"]
