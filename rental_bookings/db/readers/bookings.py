from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_bookings.models.bookings import ACTIVE_STATUSES, Booking
from rental_bookings.services.evaluator import BookedRange


def get_active_bookings_for_property(conn: Connection, property_id: int) -> list[BookedRange]:
    """
    Load the date ranges held by a property's active bookings.

    Active means pending, confirmed or completed: those still occupy their
    nights. Cancelled and rejected bookings free their dates.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        property_id (int): Property ID.

    Returns:
        list[BookedRange]: Ranges ordered by check_in.
    """
    result = conn.execute(
        select(Booking.check_in, Booking.check_out)
        .where(Booking.property_id == property_id)
        .where(Booking.status.in_(ACTIVE_STATUSES))
        .order_by(Booking.check_in)
    )
    return [BookedRange(check_in=row.check_in, check_out=row.check_out) for row in result]


def get_booking(
    conn: Connection, booking_id: int, for_update: bool = False
) -> Optional[dict[str, Any]]:
    """
    Fetch a single booking.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        booking_id (int): Booking ID.
        for_update (bool): Lock the row for the rest of the transaction.

    Returns:
        Optional[dict[str, Any]]: Booking columns, or None if not found.
    """
    stmt = select(Booking.__table__).where(Booking.id == booking_id)
    if for_update:
        stmt = stmt.with_for_update()
    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def list_bookings(
    conn: Connection,
    property_id: Optional[int] = None,
    guest_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 15,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """
    List bookings, newest first, with optional filters.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        property_id (Optional[int]): Only bookings for this property.
        guest_id (Optional[int]): Only bookings made by this guest.
        status (Optional[str]): Only bookings in this status.
        limit (int): Page size.
        offset (int): Rows to skip.

    Returns:
        list[dict[str, Any]]: Booking rows.
    """
    stmt = select(Booking.__table__)
    if property_id is not None:
        stmt = stmt.where(Booking.property_id == property_id)
    if guest_id is not None:
        stmt = stmt.where(Booking.guest_id == guest_id)
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    stmt = stmt.order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit).offset(offset)
    return [dict(row) for row in conn.execute(stmt).mappings()]
