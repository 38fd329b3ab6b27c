"""
Unit tests for metrics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rental_bookings.main import app
from rental_bookings.metrics import (
    booking_evaluations,
    booking_quotes,
    bookings_created,
    db_query_duration,
    status_transitions,
    storage_conflicts,
)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.mark.unit
def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]


@pytest.mark.unit
def test_metrics_endpoint_exposes_booking_metrics(client: TestClient) -> None:
    """Test that the booking counters and DB histogram appear once recorded."""
    booking_evaluations.labels(outcome="accepted").inc()
    booking_evaluations.labels(outcome="capacity_exceeded").inc()
    bookings_created.inc()
    booking_quotes.inc()
    storage_conflicts.inc()
    status_transitions.labels(from_status="pending", to_status="confirmed").inc()
    db_query_duration.labels(operation="insert_booking").observe(0.02)

    content = client.get("/metrics").text

    assert 'rentals_booking_evaluations_total{outcome="capacity_exceeded"}' in content
    assert "rentals_bookings_created_total" in content
    assert "rentals_booking_quotes_total" in content
    assert "rentals_booking_storage_conflicts_total" in content
    assert (
        'rentals_booking_status_transitions_total{from_status="pending",to_status="confirmed"}'
        in content
    )
    assert "rentals_db_query_duration_seconds_bucket" in content


@pytest.mark.unit
def test_metrics_endpoint_includes_help_and_type_metadata(client: TestClient) -> None:
    content = client.get("/metrics").text

    assert "# HELP rentals_booking_evaluations_total" in content
    assert "# TYPE rentals_booking_evaluations_total counter" in content
