"""Text messages via Twilio.

Without Twilio credentials (local development) messages are logged instead
of sent and reported as delivered.
"""

from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from src.events_api.core.config import get_settings
from src.events_api.core.logging import get_logger
from src.events_api.core.notifications.delivery import deliver

logger = get_logger(__name__)


def send_sms(from_: str, to: str, body: str) -> bool:
    """Send ``body`` from number ``from_`` to ``to``. Blocking.

    Returns False if Twilio rejects the message or doesn't answer in time.
    """
    settings = get_settings()
    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        logger.warning("Twilio credentials not set - message not sent", to=to)
        return True

    timeout = settings.sms_send_timeout_seconds

    def _send() -> None:
        # The HTTP timeout ends a hung call, so it releases its worker thread
        client = Client(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            http_client=TwilioHttpClient(timeout=timeout),
        )
        client.messages.create(body=body, from_=from_, to=to)

    return deliver(_send, channel="sms", timeout=timeout, to=to)
