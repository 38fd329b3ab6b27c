from typing import Any, Optional

import structlog
from sqlalchemy import delete, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.engine import Connection

from rental_bookings.models.bookings import Booking
from rental_bookings.services.evaluator import BookingDraft

logger = structlog.get_logger(__name__)


def insert_booking(
    conn: Connection,
    property_id: int,
    guest_id: int,
    draft: BookingDraft,
    special_requests: Optional[str] = None,
) -> dict[str, Any]:
    """
    Persist an admitted booking draft.

    The overlap exclusion constraint on the bookings table can reject this
    insert with an IntegrityError; the caller decides how to report it.

    Args:
        conn: Connection with an open transaction
        property_id: Booked property
        guest_id: Guest making the booking
        draft: Priced draft returned by the evaluator
        special_requests: Free-text note from the guest

    Returns:
        dict: The inserted row, including generated id and timestamps
    """
    stmt = (
        insert(Booking)
        .values(
            property_id=property_id,
            guest_id=guest_id,
            check_in=draft.check_in,
            check_out=draft.check_out,
            guests_count=draft.guests_count,
            nights=draft.nights,
            price_per_night=draft.price_per_night,
            subtotal=draft.subtotal,
            cleaning_fee=draft.cleaning_fee,
            service_fee=draft.service_fee,
            total_price=draft.total_price,
            status=draft.status,
            payment_status=draft.payment_status,
            special_requests=special_requests,
        )
        .returning(*Booking.__table__.c)
    )
    row = conn.execute(stmt).mappings().one()
    logger.debug("booking_inserted", booking_id=row["id"], property_id=property_id)
    return dict(row)


def update_booking_fields(
    conn: Connection, booking_id: int, fields: dict[str, Any]
) -> dict[str, Any]:
    """
    Update the given columns of a booking and return the fresh row.

    Args:
        conn: Connection with an open transaction
        booking_id: Booking to update
        fields: Column name to new value

    Returns:
        dict: The updated row
    """
    stmt = (
        update(Booking)
        .where(Booking.id == booking_id)
        .values(**fields)
        .returning(*Booking.__table__.c)
    )
    return dict(conn.execute(stmt).mappings().one())


def delete_booking(conn: Connection, booking_id: int) -> bool:
    """
    Permanently delete a booking.

    Returns:
        bool: True if a row was deleted
    """
    result = conn.execute(delete(Booking).where(Booking.id == booking_id))
    return result.rowcount > 0
