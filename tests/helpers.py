"""Shared test helpers for HTTP-level tests."""

from typing import Any

STRONG_PASSWORD = "correct-Horse-battery-staple-42"


def registration_payload(**overrides: Any) -> dict[str, Any]:
    """Body for POST /users/register; override any field by keyword."""
    payload: dict[str, Any] = {
        "email": "grace@example.com",
        "password": STRONG_PASSWORD,
        "confirm_password": STRONG_PASSWORD,
        "first_name": "Grace",
        "last_name": "Hopper",
        "phone_number": "+15551230002",
    }
    payload.update(overrides)
    return payload


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
