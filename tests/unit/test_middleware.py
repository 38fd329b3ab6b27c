"""
Unit tests for the request correlation middleware.
"""

from __future__ import annotations

import pytest
import structlog
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from rental_bookings.middleware import REQUEST_ID_HEADER, RequestIDMiddleware


@pytest.fixture
def client() -> TestClient:
    """App with only RequestIDMiddleware and an endpoint echoing the bound context."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/bookings/echo")
    async def echo(request: Request) -> dict[str, str]:
        bound = structlog.contextvars.get_contextvars()
        return {
            "request_id": request.state.request_id,
            "bound_request_id": bound.get("request_id", ""),
            "bound_path": bound.get("path", ""),
        }

    return TestClient(app)


@pytest.mark.unit
def test_generates_request_id_when_absent(client: TestClient) -> None:
    """Test that a UUID is generated and returned in the response header."""
    response = client.get("/bookings/echo")

    assert response.status_code == 200
    assert len(response.headers[REQUEST_ID_HEADER]) == 36


@pytest.mark.unit
def test_reuses_incoming_request_id(client: TestClient) -> None:
    """Test that a caller-supplied X-Request-ID is kept end to end."""
    response = client.get("/bookings/echo", headers={REQUEST_ID_HEADER: "gateway-abc-123"})

    assert response.headers[REQUEST_ID_HEADER] == "gateway-abc-123"
    assert response.json()["request_id"] == "gateway-abc-123"


@pytest.mark.unit
def test_header_state_and_log_context_agree(client: TestClient) -> None:
    """Test that header, request.state and structlog context carry the same id."""
    response = client.get("/bookings/echo")
    data = response.json()

    assert data["request_id"] == response.headers[REQUEST_ID_HEADER]
    assert data["bound_request_id"] == data["request_id"]
    assert data["bound_path"] == "/bookings/echo"


@pytest.mark.unit
def test_request_ids_are_unique(client: TestClient) -> None:
    first = client.get("/bookings/echo").headers[REQUEST_ID_HEADER]
    second = client.get("/bookings/echo").headers[REQUEST_ID_HEADER]

    assert first != second
