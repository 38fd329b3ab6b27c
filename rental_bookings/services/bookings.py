"""
Booking service: transaction boundary around admission and lifecycle.

create_booking() runs the whole admission in one transaction:

1. lock the property row (SELECT ... FOR UPDATE),
2. load the property's active bookings,
3. evaluate the request,
4. insert the priced draft.

The row lock serialises concurrent requests for the same property. The
bookings table also carries an exclusion constraint on active date ranges;
if an insert still trips it, the storage error is reported as the
date_range_conflict rule rather than leaked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional, Union

import structlog
from psycopg2 import errorcodes
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from rental_bookings.db.readers.bookings import (
    get_active_bookings_for_property,
    get_booking,
    list_bookings,
)
from rental_bookings.db.readers.properties import get_property, get_property_for_update
from rental_bookings.db.writers.bookings import (
    delete_booking,
    insert_booking,
    update_booking_fields,
)
from rental_bookings.metrics import (
    booking_evaluations,
    booking_quotes,
    bookings_created,
    db_query_duration,
    status_transitions,
    storage_conflicts,
)
from rental_bookings.services.evaluator import (
    BookingDraft,
    PropertyTerms,
    Rule,
    RuleViolation,
    evaluate,
)
from rental_bookings.services.notifications import (
    mark_invoice_paid,
    notify_booking_cancelled,
    notify_booking_confirmed,
)
from rental_bookings.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled", "rejected"},
    "confirmed": {"cancelled", "completed"},
    "cancelled": set(),
    "completed": set(),
    "rejected": set(),
}

OVERLAP_VIOLATION = RuleViolation(
    Rule.date_range_conflict, "Selected dates overlap with an existing booking."
)


class NotFoundError(Exception):
    """A referenced record does not exist."""


class PropertyNotFoundError(NotFoundError):
    def __init__(self, property_id: int) -> None:
        super().__init__(f"Property {property_id} not found")
        self.property_id = property_id


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class InvalidStatusTransitionError(Exception):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Status transition not allowed: {current} -> {requested}")
        self.current = current
        self.requested = requested


@dataclass
class BookingUpdateResult:
    """Updated booking plus the side effects to run once the transaction committed."""

    booking: dict[str, Any]
    previous_status: str
    follow_ups: list[Callable[[dict[str, Any]], None]] = field(default_factory=list)


def _is_overlap_violation(exc: IntegrityError) -> bool:
    return getattr(exc.orig, "pgcode", None) == errorcodes.EXCLUSION_VIOLATION


def _record_outcome(outcome: Union[BookingDraft, RuleViolation], property_id: int) -> None:
    if isinstance(outcome, RuleViolation):
        booking_evaluations.labels(outcome=outcome.rule.value).inc()
        logger.info("booking_rejected", property_id=property_id, rule=outcome.rule.value)
    else:
        booking_evaluations.labels(outcome="accepted").inc()


def create_booking(
    engine: Engine,
    property_id: int,
    guest_id: int,
    check_in: date,
    check_out: date,
    guests_count: int,
    special_requests: Optional[str] = None,
) -> Union[dict[str, Any], RuleViolation]:
    """
    Admit, price and persist a booking in pending state.

    Args:
        engine: SQLAlchemy Engine
        property_id: Property to book
        guest_id: Guest making the booking
        check_in: First night
        check_out: Departure date (after check_in)
        guests_count: Number of guests
        special_requests: Optional note stored with the booking

    Returns:
        The persisted booking row, or the first RuleViolation

    Raises:
        PropertyNotFoundError: property_id does not exist
    """
    try:
        with engine.begin() as conn:
            with db_query_duration.labels(operation="lock_property").time():
                prop = get_property_for_update(conn, property_id)
            if prop is None:
                raise PropertyNotFoundError(property_id)

            with db_query_duration.labels(operation="load_active_bookings").time():
                existing = get_active_bookings_for_property(conn, property_id)

            outcome = evaluate(
                PropertyTerms.from_row(prop), check_in, check_out, guests_count, existing
            )
            _record_outcome(outcome, property_id)
            if isinstance(outcome, RuleViolation):
                return outcome

            with db_query_duration.labels(operation="insert_booking").time():
                booking = insert_booking(
                    conn, property_id, guest_id, outcome, special_requests=special_requests
                )
    except IntegrityError as e:
        if not _is_overlap_violation(e):
            raise
        storage_conflicts.inc()
        logger.warning(
            "booking_overlap_constraint_rejected",
            property_id=property_id,
            check_in=str(check_in),
            check_out=str(check_out),
        )
        return OVERLAP_VIOLATION

    bookings_created.inc()
    logger.info(
        "booking_created",
        booking_id=booking["id"],
        property_id=property_id,
        guest_id=guest_id,
        nights=booking["nights"],
        total_price=str(booking["total_price"]),
    )
    return booking


def quote_booking(
    engine: Engine,
    property_id: int,
    check_in: date,
    check_out: date,
    guests_count: int,
) -> Union[BookingDraft, RuleViolation]:
    """
    Evaluate and price a stay without persisting anything.

    No lock is taken, so a quote that succeeds can still be rejected by a
    later create_booking() if another booking lands in between.

    Raises:
        PropertyNotFoundError: property_id does not exist
    """
    with engine.connect() as conn:
        prop = get_property(conn, property_id)
        if prop is None:
            raise PropertyNotFoundError(property_id)
        existing = get_active_bookings_for_property(conn, property_id)

    outcome = evaluate(PropertyTerms.from_row(prop), check_in, check_out, guests_count, existing)
    if isinstance(outcome, BookingDraft):
        booking_quotes.inc()
    return outcome


def fetch_booking(engine: Engine, booking_id: int) -> dict[str, Any]:
    """
    Raises:
        BookingNotFoundError: booking_id does not exist
    """
    with engine.connect() as conn:
        booking = get_booking(conn, booking_id)
    if booking is None:
        raise BookingNotFoundError(booking_id)
    return booking


def search_bookings(engine: Engine, **filters: Any) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_bookings(conn, **filters)


def update_booking(
    engine: Engine,
    booking_id: int,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    special_requests: Optional[str] = None,
    cancellation_reason: Optional[str] = None,
) -> BookingUpdateResult:
    """
    Apply a status / payment / notes change to a booking.

    Status moves follow ALLOWED_TRANSITIONS; requesting the current status
    is accepted and changes nothing. Entering confirmed or cancelled stamps
    confirmed_at / cancelled_at and queues the matching notifications.

    Raises:
        BookingNotFoundError: booking_id does not exist
        InvalidStatusTransitionError: the status move is not allowed
    """
    follow_ups: list[Callable[[dict[str, Any]], None]] = []

    with engine.begin() as conn:
        current = get_booking(conn, booking_id, for_update=True)
        if current is None:
            raise BookingNotFoundError(booking_id)

        previous_status = current["status"]
        fields: dict[str, Any] = {}

        if status is not None and status != previous_status:
            if status not in ALLOWED_TRANSITIONS.get(previous_status, set()):
                raise InvalidStatusTransitionError(previous_status, status)
            fields["status"] = status
            if status == "confirmed":
                fields["confirmed_at"] = utc_now()
                follow_ups.append(notify_booking_confirmed)
            elif status == "cancelled":
                fields["cancelled_at"] = utc_now()
                if cancellation_reason is not None:
                    fields["cancellation_reason"] = cancellation_reason
                follow_ups.append(notify_booking_cancelled)

        if payment_status is not None and payment_status != current["payment_status"]:
            fields["payment_status"] = payment_status
            if payment_status == "paid":
                follow_ups.append(mark_invoice_paid)

        if special_requests is not None:
            fields["special_requests"] = special_requests

        if not fields:
            return BookingUpdateResult(booking=current, previous_status=previous_status)

        booking = update_booking_fields(conn, booking_id, fields)

    if "status" in fields:
        status_transitions.labels(from_status=previous_status, to_status=fields["status"]).inc()
    logger.info(
        "booking_updated",
        booking_id=booking_id,
        previous_status=previous_status,
        status=booking["status"],
        payment_status=booking["payment_status"],
        fields=sorted(fields),
    )
    return BookingUpdateResult(
        booking=booking, previous_status=previous_status, follow_ups=follow_ups
    )


def remove_booking(engine: Engine, booking_id: int) -> None:
    """
    Raises:
        BookingNotFoundError: booking_id does not exist
    """
    with engine.begin() as conn:
        if not delete_booking(conn, booking_id):
            raise BookingNotFoundError(booking_id)
    logger.info("booking_deleted", booking_id=booking_id)
