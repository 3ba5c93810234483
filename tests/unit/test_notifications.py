"""Tests for email and SMS senders (src/events_api/core/notifications)."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from src.events_api.core.config import get_settings
from src.events_api.core.notifications import email, sms
from src.events_api.core.notifications.delivery import deliver
from src.events_api.core.notifications.email import build_reset_link, send_password_reset_email
from src.events_api.core.notifications.sms import send_sms

pytestmark = pytest.mark.unit


class TestPasswordResetEmail:
    def test_reset_link(self) -> None:
        assert build_reset_link("abc.def") == "http://localhost:3000/forgot-password/abc.def"

    def test_dev_mode_logs_instead_of_sending(self) -> None:
        with patch.object(email.resend.Emails, "send") as mock_send:
            assert send_password_reset_email("ada@example.com", "tok") is True
        mock_send.assert_not_called()

    def test_sends_via_resend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = get_settings().model_copy(update={"resend_api_key": "re_test"})
        monkeypatch.setattr(email, "get_settings", lambda: settings)

        with patch.object(email.resend.Emails, "send") as mock_send:
            assert send_password_reset_email("ada@example.com", "tok") is True

        params = mock_send.call_args.args[0]
        assert params["to"] == ["ada@example.com"]
        assert "http://localhost:3000/forgot-password/tok" in params["html"]

    def test_provider_error_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = get_settings().model_copy(update={"resend_api_key": "re_test"})
        monkeypatch.setattr(email, "get_settings", lambda: settings)

        with patch.object(email.resend.Emails, "send", side_effect=RuntimeError("boom")):
            assert send_password_reset_email("ada@example.com", "tok") is False


class TestSendSms:
    def test_dev_mode_logs_instead_of_sending(self) -> None:
        with patch.object(sms, "Client") as mock_client:
            assert send_sms("+1555", "+1666", "hi") is True
        mock_client.assert_not_called()

    def test_sends_via_twilio(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = get_settings().model_copy(
            update={"twilio_account_sid": "AC123", "twilio_auth_token": "secret"}
        )
        monkeypatch.setattr(sms, "get_settings", lambda: settings)

        with patch.object(sms, "Client") as mock_client:
            assert send_sms("+1555", "+1666", "hi") is True

        mock_client.assert_called_once()
        assert mock_client.call_args.args == ("AC123", "secret")
        http_client = mock_client.call_args.kwargs["http_client"]
        assert http_client.timeout == settings.sms_send_timeout_seconds
        mock_client.return_value.messages.create.assert_called_once_with(
            body="hi", from_="+1555", to="+1666"
        )

    def test_provider_error_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = get_settings().model_copy(
            update={"twilio_account_sid": "AC123", "twilio_auth_token": "secret"}
        )
        monkeypatch.setattr(sms, "get_settings", lambda: settings)

        client = MagicMock()
        client.messages.create.side_effect = RuntimeError("invalid number")
        with patch.object(sms, "Client", return_value=client):
            assert send_sms("+1555", "+1666", "hi") is False


class TestDeliver:
    def test_success(self) -> None:
        assert deliver(lambda: None, channel="test", timeout=1) is True

    def test_error_is_reported_not_raised(self) -> None:
        def _fail() -> None:
            raise ConnectionError("provider down")

        assert deliver(_fail, channel="test", timeout=1) is False

    def test_timeout(self) -> None:
        release = threading.Event()

        assert deliver(lambda: release.wait(5), channel="test", timeout=0.05) is False
        release.set()
