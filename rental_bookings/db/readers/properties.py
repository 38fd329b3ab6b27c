from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_bookings.models.properties import Property


def get_property(conn: Connection, property_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a property by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        property_id (int): Property ID.

    Returns:
        Optional[dict[str, Any]]: Property columns, or None if not found.
    """
    row = (
        conn.execute(select(Property.__table__).where(Property.id == property_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def get_property_for_update(conn: Connection, property_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a property by id and lock its row until the transaction ends.

    Concurrent booking attempts for the same property queue on this lock, so
    the overlap check and the insert that follows it see a stable calendar.
    Must be called inside engine.begin().

    Args:
        conn (Connection): Connection with an open transaction.
        property_id (int): Property ID.

    Returns:
        Optional[dict[str, Any]]: Property columns, or None if not found.
    """
    row = (
        conn.execute(
            select(Property.__table__).where(Property.id == property_id).with_for_update()
        )
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None
