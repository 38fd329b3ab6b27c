from typing import Any

import structlog
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.engine import Connection

from rental_bookings.models.properties import Property

logger = structlog.get_logger(__name__)


def insert_property(conn: Connection, data: dict[str, Any]) -> int:
    """
    Insert a property and return its id.

    Properties are managed by the listing side of the platform; this writer
    exists for seeding and tests.

    Args:
        conn: Connection with an open transaction
        data: Column values (title and max_guests at minimum)

    Returns:
        int: Generated property id
    """
    property_id = conn.execute(insert(Property).values(**data).returning(Property.id)).scalar_one()
    logger.info("property_inserted", property_id=property_id)
    return int(property_id)
