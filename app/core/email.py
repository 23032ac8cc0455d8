from urllib.parse import urlencode

import resend

from app.core.constants import JinjaEmailTemplatesEnv
from app.core.settings import get_settings


def _render_template(template_name: str, **context: str) -> str:
    """Render an HTML email template.

    Args:
        template_name: Name of the template file
        **context: Template variables

    Returns:
        Rendered HTML
    """
    template = JinjaEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        return
    resend.api_key = settings.resend_api_key


def build_reset_url(reset_token: str) -> str:
    settings = get_settings()
    return f"{settings.client_url}/reset-password?{urlencode({'token': reset_token})}"


def send_password_reset_email(to_email: str, reset_token: str) -> None:
    """Send password reset email via Resend.

    Args:
        to_email: Recipient email address
        reset_token: Token embedded in the reset link
    """
    settings = get_settings()

    from_email = f"noreply@{settings.app_domain}"
    reset_url = build_reset_url(reset_token)

    html_content = _render_template(
        "password-reset.html",
        app_name=settings.app_name,
        reset_url=reset_url,
        expires_minutes=str(settings.reset_token_expires_minutes),
    )

    resend.Emails.send(
        {
            "from": from_email,
            "to": to_email,
            "subject": f"{settings.app_name} - Reset Your Password",
            "html": html_content,
        }
    )
