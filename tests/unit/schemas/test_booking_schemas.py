"""
Unit tests for booking request/response schemas.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from rental_bookings.schemas.bookings import (
    BookingCreatePayload,
    BookingUpdatePayload,
    QuoteOut,
    StayRequest,
)
from rental_bookings.services.evaluator import BookingDraft


@pytest.mark.unit
def test_stay_request_parses_iso_dates() -> None:
    stay = StayRequest.model_validate(
        {"property_id": 1, "check_in": "2024-03-01", "check_out": "2024-03-04", "guests_count": 2}
    )

    assert stay.check_in == date(2024, 3, 1)
    assert stay.check_out == date(2024, 3, 4)


@pytest.mark.unit
@pytest.mark.parametrize("check_out", ["2024-03-01", "2024-02-28"])
def test_stay_request_requires_check_out_after_check_in(check_out: str) -> None:
    """Test that zero-night and reversed ranges are rejected."""
    with pytest.raises(ValidationError, match="check_out must be after check_in"):
        StayRequest.model_validate(
            {"property_id": 1, "check_in": "2024-03-01", "check_out": check_out, "guests_count": 1}
        )


@pytest.mark.unit
def test_stay_request_requires_at_least_one_guest() -> None:
    with pytest.raises(ValidationError):
        StayRequest.model_validate(
            {"property_id": 1, "check_in": "2024-03-01", "check_out": "2024-03-02", "guests_count": 0}
        )


@pytest.mark.unit
def test_create_payload_requires_guest_id() -> None:
    with pytest.raises(ValidationError):
        BookingCreatePayload.model_validate(
            {"property_id": 1, "check_in": "2024-03-01", "check_out": "2024-03-02", "guests_count": 1}
        )


@pytest.mark.unit
def test_update_payload_rejects_unknown_status() -> None:
    with pytest.raises(ValidationError):
        BookingUpdatePayload.model_validate({"status": "archived"})


@pytest.mark.unit
def test_update_payload_defaults_to_no_changes() -> None:
    payload = BookingUpdatePayload.model_validate({})

    assert payload.model_dump() == {
        "status": None,
        "payment_status": None,
        "special_requests": None,
        "cancellation_reason": None,
    }


@pytest.mark.unit
def test_quote_out_reads_booking_draft() -> None:
    """Test that the evaluator's draft converts to the quote response model."""
    draft = BookingDraft(
        check_in=date(2024, 3, 1),
        check_out=date(2024, 3, 4),
        guests_count=2,
        nights=3,
        price_per_night=Decimal("100.00"),
        subtotal=Decimal("300.00"),
        cleaning_fee=Decimal("50.00"),
        service_fee=Decimal("36.00"),
        total_price=Decimal("386.00"),
    )

    quote = QuoteOut.model_validate(draft)

    assert quote.nights == 3
    assert quote.total_price == Decimal("386.00")
