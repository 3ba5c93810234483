"""Outbound notifications: password reset email and SMS."""

from src.events_api.core.notifications.email import build_reset_link, send_password_reset_email
from src.events_api.core.notifications.sms import send_sms

__all__ = [
    "build_reset_link",
    "send_password_reset_email",
    "send_sms",
]
