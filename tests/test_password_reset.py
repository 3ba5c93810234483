"""Tests for the forgotten-password flow."""

from collections.abc import Callable, Iterator
from datetime import timedelta
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient

from src.events_api.core.security import TokenIdentity, TokenIssuer
from tests.helpers import STRONG_PASSWORD

pytestmark = pytest.mark.asyncio

NEW_PASSWORD = "purple-Elephant-dances-quietly-77"


@pytest.fixture
def mock_email() -> Iterator[MagicMock]:
    """Capture reset emails instead of sending them."""
    with patch(
        "src.events_api.services.password_reset_service.send_password_reset_email",
        return_value=True,
    ) as mock:
        yield mock


@pytest.fixture
def reset_token(registered_user: dict[str, Any], token_issuer: TokenIssuer) -> str:
    identity = TokenIdentity(id=registered_user["id"], email=registered_user["email"])
    return token_issuer.issue_reset(identity)


class TestForgotPassword:
    async def test_sends_link(
        self, client: AsyncClient, registered_user: dict[str, Any], mock_email: MagicMock
    ) -> None:
        response = await client.post("/forgot-password", json={"email": "Ada@example.com"})

        assert response.status_code == 200
        to, token = mock_email.call_args.args
        assert to == "ada@example.com"

        # The emailed token is accepted by the verify endpoint
        verified = await client.post("/verify-reset-token", json={"resetToken": token})
        assert verified.status_code == 200

    async def test_unknown_email(self, client: AsyncClient, mock_email: MagicMock) -> None:
        response = await client.post("/forgot-password", json={"email": "nobody@example.com"})

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"
        mock_email.assert_not_called()

    async def test_delivery_failure(
        self, client: AsyncClient, registered_user: dict[str, Any], mock_email: MagicMock
    ) -> None:
        mock_email.return_value = False

        response = await client.post("/forgot-password", json={"email": "ada@example.com"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to send email"

    async def test_missing_email(self, client: AsyncClient) -> None:
        response = await client.post("/forgot-password", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"


class TestVerifyResetToken:
    async def test_valid_token(self, client: AsyncClient, reset_token: str) -> None:
        response = await client.post("/verify-reset-token", json={"resetToken": reset_token})

        assert response.status_code == 200

    async def test_verify_does_not_consume(self, client: AsyncClient, reset_token: str) -> None:
        for _ in range(2):
            response = await client.post("/verify-reset-token", json={"resetToken": reset_token})
            assert response.status_code == 200

    async def test_access_token_is_rejected(
        self, client: AsyncClient, registered_user: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/verify-reset-token", json={"resetToken": registered_user["accessToken"]}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid token"

    async def test_expired_token(
        self, client: AsyncClient, registered_user: dict[str, Any], token_issuer: TokenIssuer
    ) -> None:
        identity = TokenIdentity(id=registered_user["id"], email=registered_user["email"])
        expired = token_issuer.issue_reset(identity, expires_delta=timedelta(seconds=-1))

        response = await client.post("/verify-reset-token", json={"resetToken": expired})

        assert response.status_code == 403

    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.post("/verify-reset-token", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"


class TestSetNewPassword:
    async def test_changes_password(self, client: AsyncClient, reset_token: str) -> None:
        response = await client.post(
            "/set-new-password", json={"resetToken": reset_token, "password": NEW_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password updated"}

        old = await client.post(
            "/users/login", json={"email": "ada@example.com", "password": STRONG_PASSWORD}
        )
        new = await client.post(
            "/users/login", json={"email": "ada@example.com", "password": NEW_PASSWORD}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_token_is_single_use(self, client: AsyncClient, reset_token: str) -> None:
        body = {"resetToken": reset_token, "password": NEW_PASSWORD}

        first = await client.post("/set-new-password", json=body)
        second = await client.post("/set-new-password", json=body)
        verified = await client.post("/verify-reset-token", json={"resetToken": reset_token})

        assert first.status_code == 200
        assert second.status_code == 403
        assert verified.status_code == 403

    async def test_reuse_allowed_when_single_use_disabled(
        self,
        client: AsyncClient,
        reset_token: str,
        override_settings: Callable[..., Any],
    ) -> None:
        override_settings(reset_token_single_use=False)
        body = {"resetToken": reset_token, "password": NEW_PASSWORD}

        first = await client.post("/set-new-password", json=body)
        second = await client.post("/set-new-password", json=body)

        assert first.status_code == 200
        assert second.status_code == 200

    async def test_weak_password(self, client: AsyncClient, reset_token: str) -> None:
        response = await client.post(
            "/set-new-password", json={"resetToken": reset_token, "password": "password"}
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Weak password")

    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.post(
            "/set-new-password", json={"resetToken": "not-a-jwt", "password": NEW_PASSWORD}
        )

        assert response.status_code == 403

    async def test_deleted_user(self, client: AsyncClient, token_issuer: TokenIssuer) -> None:
        token = token_issuer.issue_reset(TokenIdentity(id=9999, email="gone@example.com"))

        response = await client.post(
            "/set-new-password", json={"resetToken": token, "password": NEW_PASSWORD}
        )

        assert response.status_code == 403
