"""Tests for error responses: request_id, validation summary and the catch-all 500."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.events_api.main import app

pytestmark = pytest.mark.asyncio


@pytest.fixture
def boom_route():
    """Temporarily mount a route that raises an unexpected exception."""

    async def _boom() -> None:
        raise RuntimeError("kaboom")

    app.add_api_route("/__boom", _boom, methods=["GET"])
    yield
    app.router.routes[:] = [
        route for route in app.router.routes if getattr(route, "path", None) != "/__boom"
    ]


async def test_not_found_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/no-such-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert data["request_id"]
    assert response.headers["X-Request-ID"] == data["request_id"]


async def test_incoming_request_id_is_echoed(client: AsyncClient) -> None:
    request_id = "0b0c5d6a-8f2e-4f33-9d6a-2d9c8d4b1e11"

    response = await client.get("/no-such-endpoint", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id


async def test_different_requests_have_different_ids(client: AsyncClient) -> None:
    first = await client.get("/no-such-endpoint")
    second = await client.get("/no-such-endpoint")

    assert first.json()["request_id"] != second.json()["request_id"]


async def test_validation_error_is_400(client: AsyncClient) -> None:
    response = await client.post("/users/login", json={"email": "ada@example.com", "password": 123})

    assert response.status_code == 400
    data = response.json()
    assert data["detail"] == "Invalid request"
    assert data["errors"][0]["loc"] == ["body", "password"]
    assert "input" not in data["errors"][0]


async def test_unhandled_exception_is_generic_500(boom_route) -> None:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/__boom")

    assert response.status_code == 500
    data = response.json()
    assert data["detail"] == "Internal server error"
    assert "kaboom" not in response.text
    assert "request_id" in data


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/no-such-endpoint")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
