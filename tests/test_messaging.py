"""Tests for the SMS endpoint."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

MESSAGE = {"from": "+15550001111", "to": "+15550002222", "message": "See you at 9"}


@pytest.fixture
def mock_sms() -> Iterator[MagicMock]:
    with patch("src.events_api.api.routes.messaging.send_sms", return_value=True) as mock:
        yield mock


class TestSendMessage:
    async def test_sends(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_sms: MagicMock
    ) -> None:
        response = await client.post("/send-message", json=MESSAGE, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Message sent"}
        mock_sms.assert_called_once_with("+15550001111", "+15550002222", "See you at 9")

    async def test_provider_failure(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_sms: MagicMock
    ) -> None:
        mock_sms.return_value = False

        response = await client.post("/send-message", json=MESSAGE, headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to send message"

    @pytest.mark.parametrize("field", ["from", "to", "message"])
    async def test_missing_field(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        mock_sms: MagicMock,
        field: str,
    ) -> None:
        body = {k: v for k, v in MESSAGE.items() if k != field}

        response = await client.post("/send-message", json=body, headers=auth_headers)

        assert response.status_code == 400
        mock_sms.assert_not_called()

    async def test_requires_auth(self, client: AsyncClient, mock_sms: MagicMock) -> None:
        response = await client.post("/send-message", json=MESSAGE)

        assert response.status_code == 401
        mock_sms.assert_not_called()
