"""Password reset emails via Resend.

Without RESEND_API_KEY (local development) the email is not sent; the
attempt is logged and reported as delivered.
"""

import html

import resend

from src.events_api.core.config import get_settings
from src.events_api.core.logging import get_logger
from src.events_api.core.notifications.delivery import deliver

logger = get_logger(__name__)

_RESET_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; color: #333;
             max-width: 600px; margin: 0 auto; padding: 20px; line-height: 1.6;">
    <h1 style="color: #2563eb;">Reset your password</h1>
    <p>Someone asked to reset the password for your {app_name} account.</p>
    <p style="margin: 32px 0;">
        <a href="{link}" style="background: #2563eb; color: #fff; padding: 12px 24px;
           border-radius: 6px; text-decoration: none;">Choose a new password</a>
    </p>
    <p style="color: #666; font-size: 14px;">
        The link expires in {minutes} minutes. If you didn't ask for a reset,
        ignore this email and your password stays the same.
    </p>
</body>
</html>"""


def build_reset_link(token: str) -> str:
    """Frontend page where the user picks a new password."""
    return f"{get_settings().app_url}/forgot-password/{token}"


def render_reset_email(link: str) -> str:
    settings = get_settings()
    return _RESET_TEMPLATE.format(
        app_name=html.escape(settings.app_name),
        link=html.escape(link, quote=True),
        minutes=settings.reset_token_expire_minutes,
    )


def send_password_reset_email(to: str, token: str) -> bool:
    """Email a reset link. Blocking; returns False if Resend fails or times out."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - reset email not sent", to=to)
        return True

    resend.api_key = settings.resend_api_key
    params = {
        "from": settings.email_from,
        "to": [to],
        "subject": f"Reset your {settings.app_name} password",
        "html": render_reset_email(build_reset_link(token)),
    }
    return deliver(
        lambda: resend.Emails.send(params),
        channel="email",
        timeout=settings.email_send_timeout_seconds,
        to=to,
    )
